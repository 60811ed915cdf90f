from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        stmt = select(Session).where(Session.id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_refresh_token_hash(self, token_hash: str) -> Optional[Session]:
        """
        Find session by renewal identifier hash.

        Revoked/expired sessions are returned too - the caller decides
        which error to report.
        """
        stmt = select(Session).where(Session.refresh_token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, session_obj: Session) -> Session:
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def rotate_refresh_token(
        self,
        session_id: UUID,
        old_hash: str,
        new_hash: str,
        expires_at: datetime,
    ) -> bool:
        """Compare-and-swap on refresh_token_hash"""
        stmt = (
            update(Session)
            .where(
                Session.id == session_id,
                Session.refresh_token_hash == old_hash,
                Session.revoked == False,
            )
            .values(refresh_token_hash=new_hash, expires_at=expires_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def revoke_by_id(self, session_id: UUID) -> bool:
        stmt = (
            update(Session)
            .where(Session.id == session_id, Session.revoked == False)
            .values(revoked=True, revoked_at=datetime.utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def revoke_all_by_account_id(self, account_id: UUID) -> int:
        stmt = (
            update(Session)
            .where(Session.account_id == account_id, Session.revoked == False)
            .values(revoked=True, revoked_at=datetime.utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def revoke_all_except_session(self, account_id: UUID, session_id: UUID) -> int:
        stmt = (
            update(Session)
            .where(
                Session.account_id == account_id,
                Session.id != session_id,
                Session.revoked == False,
            )
            .values(revoked=True, revoked_at=datetime.utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_all_by_account_id(self, account_id: UUID) -> int:
        stmt = delete(Session).where(Session.account_id == account_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
