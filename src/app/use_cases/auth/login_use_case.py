"""
Login Use Case

Verifies email + password and issues a session token pair.
"""

import logging

from libs.result import Result, Return
from src.app.errors import unauthorized_error
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.accounts.dtos import AccountInfo
from src.app.validation import PASSWORD_MAX_LENGTH, normalize_email
from .dtos import LoginResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class LoginUseCase:
    """
    Business Rules:
    - Hash work is done even when the account is missing (no timing oracle)
    - Passwords past the bcrypt input limit can never match and are refused unhashed
    - Federated accounts have no password and cannot log in this way
    - Unconfirmed accounts are refused while confirmation is required
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: PasswordHasher,
        tokens: TokenService,
        require_confirmation: bool = True,
    ):
        self.uow = uow
        self.hasher = hasher
        self.tokens = tokens
        self.require_confirmation = require_confirmation

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Errors:
            - UNAUTHORIZED: wrong credentials or unconfirmed account
        """
        email_result = normalize_email(email)
        if email_result.is_err():
            return Return.err(unauthorized_error(INVALID_CREDENTIALS))

        if len(password.encode("utf-8")) > PASSWORD_MAX_LENGTH:
            return Return.err(unauthorized_error(INVALID_CREDENTIALS))

        async with self.uow:
            account = await self.uow.accounts.get_by_email(email_result.value)

            if account is None or account.password_hash is None:
                # Burn the same time as a real verification
                self.hasher.hash(password)
                return Return.err(unauthorized_error(INVALID_CREDENTIALS))

            if not self.hasher.verify(password, account.password_hash):
                return Return.err(unauthorized_error(INVALID_CREDENTIALS))

            if self.require_confirmation and not account.is_confirmed:
                return Return.err(unauthorized_error("Account email not confirmed"))

            issued = await self.tokens.issue_token(account)

            await self.uow.commit()

        logger.info(f"Login: account {account.id}, session {issued.session_id}")
        return Return.ok(
            LoginResponse(
                account=AccountInfo.from_account(account),
                access_token=issued.access_token,
                refresh_token=issued.refresh_token,
                session_id=issued.session_id,
                expires_at=issued.expires_at,
            )
        )
