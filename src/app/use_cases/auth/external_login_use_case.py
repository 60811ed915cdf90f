"""
External Login Use Case

Signs in with a token issued by an external identity provider, creating
the local account on first use.
"""

import logging
import secrets
from datetime import datetime

from libs.result import Result, Return
from src.app.errors import conflict_error, external_auth_error
from src.app.repositories.account_repository import DuplicateAccountError
from src.app.services.identity_verifier import ExternalIdentityError, ExternalIdentityVerifier
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.accounts.dtos import AccountInfo
from src.app.validation import normalize_email, username_candidate
from src.domain.entities import Account
from .dtos import ExternalLoginResponse

logger = logging.getLogger(__name__)

USERNAME_SUFFIX_ATTEMPTS = 20


class ExternalLoginUseCase:
    """
    Business Rules:
    - The provider must accept the token and vouch for the email
    - Unknown emails get a new account: confirmed, no password hash
    - The provider username is adapted to local rules and suffixed (_1, _2, ...)
      when taken, so a first login is never blocked by it
    - Known emails log into the existing account (confirming it if needed)
    - A session token pair is issued either way
    """

    def __init__(
        self,
        uow: UnitOfWork,
        verifier: ExternalIdentityVerifier,
        tokens: TokenService,
    ):
        self.uow = uow
        self.verifier = verifier
        self.tokens = tokens

    async def execute(self, external_token: str) -> Result[ExternalLoginResponse]:
        """
        Errors:
            - EXTERNAL_AUTH_ERROR: token rejected, provider unreachable or email unverified
            - CONFLICT: a concurrent sign-up claimed the email or username first
        """
        try:
            identity = await self.verifier.exchange(external_token)
        except ExternalIdentityError as e:
            logger.warning(f"External token could not be verified: {e}")
            return Return.err(external_auth_error("Identity provider unavailable"))

        if identity is None:
            return Return.err(external_auth_error())

        if not identity.verified:
            return Return.err(external_auth_error("Email not verified by identity provider"))

        email_result = normalize_email(identity.email)
        if email_result.is_err():
            return Return.err(external_auth_error("Identity provider returned an invalid email"))
        email = email_result.value

        async with self.uow:
            account = await self.uow.accounts.get_by_email(email)
            is_new_account = account is None

            if is_new_account:
                username = await self._available_username(identity.username)
                now = datetime.utcnow()
                try:
                    account = await self.uow.accounts.create(
                        Account(
                            email=email,
                            username=username,
                            password_hash=None,
                            is_confirmed=True,
                            created_at=now,
                            updated_at=now,
                        )
                    )
                except DuplicateAccountError as e:
                    return Return.err(conflict_error(e.fields))
            elif not account.is_confirmed:
                account.is_confirmed = True
                account.updated_at = datetime.utcnow()
                account = await self.uow.accounts.update(account)

            issued = await self.tokens.issue_token(account)

            await self.uow.commit()

        logger.info(f"External login: account {account.id} (new={is_new_account})")
        return Return.ok(
            ExternalLoginResponse(
                account=AccountInfo.from_account(account),
                access_token=issued.access_token,
                refresh_token=issued.refresh_token,
                session_id=issued.session_id,
                expires_at=issued.expires_at,
                is_new_account=is_new_account,
            )
        )

    async def _available_username(self, preferred: str) -> str:
        """First unused name among the provider's (made valid) and its numbered variants"""
        base = username_candidate(preferred)
        for attempt in range(USERNAME_SUFFIX_ATTEMPTS):
            candidate = base if attempt == 0 else f"{base}_{attempt}"
            if await self.uow.accounts.get_by_username(candidate) is None:
                return candidate
        return f"{base}_{secrets.token_hex(4)}"
