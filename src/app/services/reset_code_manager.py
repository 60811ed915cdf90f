"""
Reset-Code Manager

Single-use, time-boxed password reset codes bound to an email address.
"""

import logging
import secrets
import string
from datetime import datetime, timedelta
from typing import Optional

from libs.result import Result, Return
from src.app.errors import invalid_code_error
from src.app.services.notification_sender import NotificationError, NotificationSender
from src.app.services.token_service import TokenService, hash_secret
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ResetCode, TokenScope

logger = logging.getLogger(__name__)

RESET_CODE_TTL = timedelta(minutes=30)
RESET_CODE_LENGTH = 6
RESET_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_reset_code() -> str:
    return "".join(secrets.choice(RESET_CODE_ALPHABET) for _ in range(RESET_CODE_LENGTH))


class ResetCodeManager:
    """
    Business Rules:
    - One outstanding code per email; a new code supersedes the old one
    - Codes are stored as SHA-256 hashes
    - Verification consumes the code with a conditional update, so
      concurrent verifications succeed at most once
    - A code only counts while its email still belongs to the account
    - Success yields a password_reset-scoped token, not a session

    Operates inside the caller's unit of work; never commits.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_service: TokenService,
        notifier: NotificationSender,
        code_ttl: timedelta = RESET_CODE_TTL,
    ):
        self.uow = uow
        self.token_service = token_service
        self.notifier = notifier
        self.code_ttl = code_ttl

    async def issue_reset_code(self, email: str) -> Optional[str]:
        """
        Generate and store a code for email.

        Returns:
            The plain code to deliver, or None when no account owns the email
        """
        account = await self.uow.accounts.get_by_email(email)
        if account is None:
            return None

        code = generate_reset_code()
        now = datetime.utcnow()
        await self.uow.reset_codes.replace(
            ResetCode(
                account_id=account.id,
                email=account.email,
                code_hash=hash_secret(code),
                consumed=False,
                issued_at=now,
                expires_at=now + self.code_ttl,
            )
        )
        return code

    async def deliver_reset_code(self, email: str, code: str) -> None:
        """Fire-and-forget: a failed send leaves the stored code in place"""
        try:
            await self.notifier.send_reset_code(email, code)
        except NotificationError as e:
            logger.error(f"Reset code delivery to {email} failed: {e}")

    async def verify_reset_code(self, email: str, code: str) -> Result[str]:
        """
        Consume the code and return a password_reset-scoped token.

        Errors:
            - INVALID_CODE: no outstanding code, wrong code, expired or already used
        """
        reset_code = await self.uow.reset_codes.get_by_email(email)
        if reset_code is None:
            return Return.err(invalid_code_error())

        account = await self.uow.accounts.get_by_id(reset_code.account_id)
        if account is None or account.email != reset_code.email:
            return Return.err(invalid_code_error())

        consumed = await self.uow.reset_codes.consume(
            email, hash_secret(code), datetime.utcnow()
        )
        if not consumed:
            return Return.err(invalid_code_error())

        return Return.ok(
            self.token_service.issue_scoped_token(account, TokenScope.password_reset)
        )
