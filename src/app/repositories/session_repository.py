from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def get_by_refresh_token_hash(self, token_hash: str) -> Optional[Session]:
        """Get session by SHA-256 hash of its renewal identifier"""
        pass

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def rotate_refresh_token(
        self,
        session_id: UUID,
        old_hash: str,
        new_hash: str,
        expires_at: datetime,
    ) -> bool:
        """
        Replace the renewal identifier hash only if it still equals old_hash
        and the session is not revoked. Returns True if this call won.
        """
        pass

    @abstractmethod
    async def revoke_by_id(self, session_id: UUID) -> bool:
        """Revoke a specific session. Returns True if session existed and was revoked."""
        pass

    @abstractmethod
    async def revoke_all_by_account_id(self, account_id: UUID) -> int:
        """Revoke all sessions for an account. Returns count of revoked sessions."""
        pass

    @abstractmethod
    async def revoke_all_except_session(self, account_id: UUID, session_id: UUID) -> int:
        """Revoke all sessions for an account except the specified session. Returns count."""
        pass

    @abstractmethod
    async def delete_all_by_account_id(self, account_id: UUID) -> int:
        """Delete all sessions for an account. Returns count of deleted sessions."""
        pass
