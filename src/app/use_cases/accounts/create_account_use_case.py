"""
Create Account Use Case

Registers a new, unconfirmed account with a password.
"""

import logging
from datetime import datetime

from libs.result import Result, Return
from src.app.errors import conflict_error
from src.app.repositories.account_repository import DuplicateAccountError
from src.app.services.notification_sender import (
    NotificationSender,
    send_email_confirmation_quietly,
)
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.validation import (
    normalize_email,
    validate_password_strength,
    validate_username,
)
from src.domain.entities import Account
from .dtos import AccountInfo, CreateAccountCommand
from .uniqueness import find_conflicting_fields

logger = logging.getLogger(__name__)


class CreateAccountUseCase:
    """
    Create Account Use Case

    Business Logic:
    1. Validate email format, username format and password strength
    2. Reject email/username already in use (checked, then enforced by
       the store's unique constraints on insert)
    3. Hash password
    4. Persist Account with is_confirmed=False
    5. Commit, then send the confirmation email (fire-and-forget)
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher, notifier: NotificationSender):
        self.uow = uow
        self.hasher = hasher
        self.notifier = notifier

    async def execute(self, command: CreateAccountCommand) -> Result[AccountInfo]:
        """
        Execute create account use case

        Returns:
            Result[AccountInfo] with the new account's public identity

        Errors:
            - VALIDATION_ERROR: malformed email/username or weak password
            - CONFLICT: email and/or username already in use
        """
        email_result = normalize_email(command.email)
        if email_result.is_err():
            return Return.err(email_result.error)
        email = email_result.value

        for check in (
            validate_username(command.username),
            validate_password_strength(command.password),
        ):
            if check.is_err():
                return Return.err(check.error)

        async with self.uow:
            conflicts = await find_conflicting_fields(self.uow, email, command.username)
            if conflicts:
                return Return.err(conflict_error(conflicts))

            now = datetime.utcnow()
            account = Account(
                email=email,
                username=command.username,
                password_hash=self.hasher.hash(command.password),
                is_confirmed=False,
                created_at=now,
                updated_at=now,
            )

            try:
                account = await self.uow.accounts.create(account)
            except DuplicateAccountError as e:
                # Lost a race with a concurrent registration
                return Return.err(conflict_error(e.fields))

            await self.uow.commit()

        logger.info(f"Account created: {account.id}")
        await send_email_confirmation_quietly(self.notifier, account.email, account.id)

        return Return.ok(AccountInfo.from_account(account))
