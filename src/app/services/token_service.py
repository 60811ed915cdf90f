"""
Token Service

Mints, validates, renews and revokes bearer tokens.
Access tokens are signed JWTs; each session-scoped token points at a
Session row holding the hash of its single-use renewal identifier.
"""

import hashlib
import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.errors import unauthorized_error
from src.app.services.token_signer import TokenSigner
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Account, Session, TokenScope

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TTL = timedelta(minutes=15)
REFRESH_TOKEN_TTL = timedelta(days=30)
RESET_TOKEN_TTL = timedelta(minutes=10)


class TokenClaims(BaseModel):
    """Decoded, validated claims of a bearer token"""

    account_id: UUID
    session_id: Optional[UUID] = None
    scope: TokenScope
    email: str
    username: str
    is_admin: bool = False
    issued_at: datetime
    expires_at: datetime


class IssuedToken(BaseModel):
    """Access token plus the renewal identifier that can replace it"""

    access_token: str
    refresh_token: str
    session_id: str
    expires_at: datetime


def hash_secret(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


class TokenService:
    """
    Business Rules:
    - Access token expiry = issue time + ACCESS_TOKEN_TTL
    - Renewal identifier lives REFRESH_TOKEN_TTL and is exchanged at most once
    - Rotation is a compare-and-swap in the store, never an in-process lock
    - Tokens of revoked sessions or deleted accounts fail validation

    Operates inside the caller's unit of work; never commits.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        signer: TokenSigner,
        access_ttl: timedelta = ACCESS_TOKEN_TTL,
        refresh_ttl: timedelta = REFRESH_TOKEN_TTL,
        reset_ttl: timedelta = RESET_TOKEN_TTL,
    ):
        self.uow = uow
        self.signer = signer
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.reset_ttl = reset_ttl

    def _sign(self, account: Account, scope: TokenScope, ttl: timedelta, session_id: UUID = None) -> str:
        claims = {
            "sub": str(account.id),
            "scope": scope.value,
            "email": account.email,
            "username": account.username,
            "is_admin": account.is_application_admin,
        }
        if session_id is not None:
            claims["sid"] = str(session_id)
        return self.signer.sign(claims, ttl)

    async def issue_token(self, account: Account) -> IssuedToken:
        """Create a session and sign a session-scoped access token for it"""
        refresh_token = secrets.token_urlsafe(32)

        session = Session(
            account_id=account.id,
            refresh_token_hash=hash_secret(refresh_token),
            expires_at=datetime.utcnow() + self.refresh_ttl,
        )
        session = await self.uow.sessions.create(session)

        access_token = self._sign(account, TokenScope.session, self.access_ttl, session.id)

        return IssuedToken(
            access_token=access_token,
            refresh_token=refresh_token,
            session_id=str(session.id),
            expires_at=datetime.now(UTC) + self.access_ttl,
        )

    def issue_scoped_token(self, account: Account, scope: TokenScope) -> str:
        """Short-lived token with no session and no renewal identifier"""
        return self._sign(account, scope, self.reset_ttl)

    async def renew_token(self, refresh_token: str) -> Result[IssuedToken]:
        """
        Exchange a renewal identifier for a new token pair.

        Errors:
            - UNAUTHORIZED: unknown, already used, revoked or expired identifier
        """
        old_hash = hash_secret(refresh_token)
        session = await self.uow.sessions.get_by_refresh_token_hash(old_hash)

        if session is None:
            return Return.err(unauthorized_error("Invalid refresh token"))

        if session.revoked:
            return Return.err(unauthorized_error("Session has been revoked"))

        if session.expires_at < datetime.utcnow():
            return Return.err(unauthorized_error("Session has expired"))

        account = await self.uow.accounts.get_by_id(session.account_id)
        if account is None:
            return Return.err(unauthorized_error("Account no longer exists"))

        new_refresh_token = secrets.token_urlsafe(32)
        rotated = await self.uow.sessions.rotate_refresh_token(
            session.id,
            old_hash,
            hash_secret(new_refresh_token),
            datetime.utcnow() + self.refresh_ttl,
        )
        if not rotated:
            # Another renewal with the same identifier won the swap
            logger.warning(f"Refresh token replay rejected for session {session.id}")
            return Return.err(unauthorized_error("Refresh token already used"))

        access_token = self._sign(account, TokenScope.session, self.access_ttl, session.id)

        return Return.ok(
            IssuedToken(
                access_token=access_token,
                refresh_token=new_refresh_token,
                session_id=str(session.id),
                expires_at=datetime.now(UTC) + self.access_ttl,
            )
        )

    async def validate_token(self, token: str) -> Result[TokenClaims]:
        """
        Verify signature and expiry, then check the store still backs the token.

        Errors:
            - UNAUTHORIZED: bad signature, expired, account deleted, session revoked
        """
        payload = self.signer.verify(token)
        if payload is None:
            return Return.err(unauthorized_error())

        try:
            claims = TokenClaims(
                account_id=UUID(payload["sub"]),
                session_id=UUID(payload["sid"]) if payload.get("sid") else None,
                scope=TokenScope(payload["scope"]),
                email=payload["email"],
                username=payload["username"],
                is_admin=bool(payload.get("is_admin", False)),
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except (KeyError, TypeError, ValueError):
            return Return.err(unauthorized_error("Malformed token claims"))

        account = await self.uow.accounts.get_by_id(claims.account_id)
        if account is None:
            return Return.err(unauthorized_error("Account no longer exists"))

        if claims.scope == TokenScope.session:
            if claims.session_id is None:
                return Return.err(unauthorized_error("Malformed token claims"))
            session = await self.uow.sessions.get_by_id(claims.session_id)
            if session is None or session.account_id != claims.account_id:
                return Return.err(unauthorized_error())
            if session.revoked:
                return Return.err(unauthorized_error("Session has been revoked"))

        return Return.ok(claims)

    async def revoke_token(self, token: str) -> Result[bool]:
        """Revoke the session behind a token, killing its renewal identifier too"""
        validation = await self.validate_token(token)
        if validation.is_err():
            return Return.err(validation.error)

        claims = validation.value
        if claims.session_id is None:
            # Scoped tokens carry no session; they simply run out
            return Return.ok(False)

        revoked = await self.uow.sessions.revoke_by_id(claims.session_id)
        return Return.ok(revoked)
