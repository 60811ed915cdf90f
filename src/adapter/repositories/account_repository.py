from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.account_repository import DuplicateAccountError, IAccountRepository
from src.domain.entities import Account


def _duplicate_fields(error: IntegrityError) -> List[str]:
    """Best-effort extraction of the violated column from the driver message"""
    message = str(error.orig).lower()
    fields = [field for field in ("email", "username") if field in message]
    return fields or ["email", "username"]


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        stmt = select(Account).where(Account.id == account_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email(self, email: str) -> Optional[Account]:
        stmt = select(Account).where(Account.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_username(self, username: str) -> Optional[Account]:
        stmt = select(Account).where(Account.username == username)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, account: Account) -> Account:
        return await self._save(account)

    async def update(self, account: Account) -> Account:
        return await self._save(account)

    async def delete(self, account: Account) -> None:
        await self.session.delete(account)
        await self.session.flush()

    async def _save(self, account: Account) -> Account:
        self.session.add(account)
        try:
            await self.session.flush()
        except IntegrityError as e:
            # Unique index on email/username is the final arbiter of a race
            await self.session.rollback()
            raise DuplicateAccountError(_duplicate_fields(e)) from e
        await self.session.refresh(account)
        return account
