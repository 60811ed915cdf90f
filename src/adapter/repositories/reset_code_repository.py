from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.reset_code_repository import IResetCodeRepository
from src.domain.entities import ResetCode


class ResetCodeRepository(IResetCodeRepository):
    """ResetCode repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[ResetCode]:
        stmt = select(ResetCode).where(ResetCode.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def replace(self, reset_code: ResetCode) -> ResetCode:
        """
        Insert the email's row, or overwrite it in place when one exists.

        A single INSERT ... ON CONFLICT (email) DO UPDATE, so concurrent
        issuers for the same email never trip the unique index.
        """
        dialect = self.session.get_bind().dialect.name
        insert = postgresql.insert if dialect == "postgresql" else sqlite.insert

        stmt = insert(ResetCode).values(
            id=reset_code.id,
            account_id=reset_code.account_id,
            email=reset_code.email,
            code_hash=reset_code.code_hash,
            consumed=False,
            issued_at=reset_code.issued_at,
            expires_at=reset_code.expires_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["email"],
            set_=dict(
                account_id=stmt.excluded.account_id,
                code_hash=stmt.excluded.code_hash,
                consumed=False,
                issued_at=stmt.excluded.issued_at,
                expires_at=stmt.excluded.expires_at,
            ),
        )
        await self.session.execute(stmt)
        await self.session.flush()

        stored = await self.session.exec(
            select(ResetCode)
            .where(ResetCode.email == reset_code.email)
            .execution_options(populate_existing=True)
        )
        return stored.one()

    async def consume(self, email: str, code_hash: str, now: datetime) -> bool:
        stmt = (
            update(ResetCode)
            .where(
                ResetCode.email == email,
                ResetCode.code_hash == code_hash,
                ResetCode.consumed == False,
                ResetCode.expires_at > now,
            )
            .values(consumed=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def delete_by_account_id(self, account_id: UUID) -> int:
        stmt = delete(ResetCode).where(ResetCode.account_id == account_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
