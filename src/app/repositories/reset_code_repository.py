from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import ResetCode


class IResetCodeRepository(ABC):
    """ResetCode repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[ResetCode]:
        """Get the reset code row for an email, consumed or not"""
        pass

    @abstractmethod
    async def replace(self, reset_code: ResetCode) -> ResetCode:
        """Store reset_code as the only code for its email, superseding any prior one"""
        pass

    @abstractmethod
    async def consume(self, email: str, code_hash: str, now: datetime) -> bool:
        """
        Mark the code consumed only if it matches, is unconsumed and unexpired.
        Returns True if this call consumed it.
        """
        pass

    @abstractmethod
    async def delete_by_account_id(self, account_id: UUID) -> int:
        """Delete reset codes bound to an account. Returns count."""
        pass
