"""
In-memory UnitOfWork for tests that run use cases concurrently.

A single SQLite AsyncSession cannot be shared by overlapping coroutines,
so these repositories keep rows in dicts. Writes apply immediately;
rollback is a no-op. Every conditional write yields to the event loop
first and then checks-and-sets without awaiting, which mirrors how the
database serializes a conditional UPDATE or a unique-index insert.
"""

import asyncio
from datetime import datetime
from typing import Dict, Optional
from uuid import UUID

from src.app.repositories.account_repository import DuplicateAccountError, IAccountRepository
from src.app.repositories.reset_code_repository import IResetCodeRepository
from src.app.repositories.session_repository import ISessionRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Account, ResetCode, Session


class InMemoryStore:
    def __init__(self):
        self.accounts: Dict[UUID, Account] = {}
        self.sessions: Dict[UUID, Session] = {}
        self.reset_codes: Dict[str, ResetCode] = {}


class InMemoryAccountRepository(IAccountRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        return self.store.accounts.get(account_id)

    async def get_by_email(self, email: str) -> Optional[Account]:
        return next((a for a in self.store.accounts.values() if a.email == email), None)

    async def get_by_username(self, username: str) -> Optional[Account]:
        return next((a for a in self.store.accounts.values() if a.username == username), None)

    async def create(self, account: Account) -> Account:
        return await self._save(account)

    async def update(self, account: Account) -> Account:
        return await self._save(account)

    async def delete(self, account: Account) -> None:
        self.store.accounts.pop(account.id, None)

    async def _save(self, account: Account) -> Account:
        await asyncio.sleep(0)
        fields = []
        for other in self.store.accounts.values():
            if other.id == account.id:
                continue
            if other.email == account.email:
                fields.append("email")
            if other.username == account.username:
                fields.append("username")
        if fields:
            raise DuplicateAccountError(sorted(set(fields)))
        self.store.accounts[account.id] = account
        return account


class InMemorySessionRepository(ISessionRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        return self.store.sessions.get(session_id)

    async def get_by_refresh_token_hash(self, token_hash: str) -> Optional[Session]:
        return next(
            (s for s in self.store.sessions.values() if s.refresh_token_hash == token_hash),
            None,
        )

    async def create(self, session_obj: Session) -> Session:
        self.store.sessions[session_obj.id] = session_obj
        return session_obj

    async def rotate_refresh_token(
        self, session_id: UUID, old_hash: str, new_hash: str, expires_at: datetime
    ) -> bool:
        await asyncio.sleep(0)
        session = self.store.sessions.get(session_id)
        if session is None or session.revoked or session.refresh_token_hash != old_hash:
            return False
        session.refresh_token_hash = new_hash
        session.expires_at = expires_at
        return True

    async def revoke_by_id(self, session_id: UUID) -> bool:
        session = self.store.sessions.get(session_id)
        if session is None or session.revoked:
            return False
        session.revoked = True
        session.revoked_at = datetime.utcnow()
        return True

    async def revoke_all_by_account_id(self, account_id: UUID) -> int:
        return self._revoke_where(lambda s: s.account_id == account_id)

    async def revoke_all_except_session(self, account_id: UUID, session_id: UUID) -> int:
        return self._revoke_where(lambda s: s.account_id == account_id and s.id != session_id)

    async def delete_all_by_account_id(self, account_id: UUID) -> int:
        doomed = [s.id for s in self.store.sessions.values() if s.account_id == account_id]
        for session_id in doomed:
            del self.store.sessions[session_id]
        return len(doomed)

    def _revoke_where(self, predicate) -> int:
        count = 0
        for session in self.store.sessions.values():
            if predicate(session) and not session.revoked:
                session.revoked = True
                session.revoked_at = datetime.utcnow()
                count += 1
        return count


class InMemoryResetCodeRepository(IResetCodeRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_email(self, email: str) -> Optional[ResetCode]:
        return self.store.reset_codes.get(email)

    async def replace(self, reset_code: ResetCode) -> ResetCode:
        await asyncio.sleep(0)
        self.store.reset_codes[reset_code.email] = reset_code
        return reset_code

    async def consume(self, email: str, code_hash: str, now: datetime) -> bool:
        await asyncio.sleep(0)
        reset_code = self.store.reset_codes.get(email)
        if (
            reset_code is None
            or reset_code.consumed
            or reset_code.code_hash != code_hash
            or reset_code.expires_at <= now
        ):
            return False
        reset_code.consumed = True
        return True

    async def delete_by_account_id(self, account_id: UUID) -> int:
        doomed = [e for e, c in self.store.reset_codes.items() if c.account_id == account_id]
        for email in doomed:
            del self.store.reset_codes[email]
        return len(doomed)


class InMemoryUnitOfWork(UnitOfWork):
    def __init__(self, store: InMemoryStore = None):
        self.store = store or InMemoryStore()
        self.accounts = InMemoryAccountRepository(self.store)
        self.sessions = InMemorySessionRepository(self.store)
        self.reset_codes = InMemoryResetCodeRepository(self.store)
        self.commits = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        pass
