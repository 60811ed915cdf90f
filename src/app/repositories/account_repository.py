from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Account


class DuplicateAccountError(Exception):
    """Raised by create/update when a unique email or username is already taken"""

    def __init__(self, fields: List[str]):
        self.fields = fields
        super().__init__(f"Duplicate account fields: {fields}")


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by email address"""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[Account]:
        """Get account by username"""
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """
        Create a new account.

        Raises DuplicateAccountError when the email or username is already
        taken, so concurrent registrations cannot both succeed.
        """
        pass

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """Update existing account; raises DuplicateAccountError on collision"""
        pass

    @abstractmethod
    async def delete(self, account: Account) -> None:
        """Delete account"""
        pass
