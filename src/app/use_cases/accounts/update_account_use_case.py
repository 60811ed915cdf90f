"""
Update Account Use Case

Changes email and/or username of an account.
"""

import logging
from datetime import datetime
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import conflict_error, not_found_error, unauthorized_error, validation_error
from src.app.repositories.account_repository import DuplicateAccountError
from src.app.services.notification_sender import (
    NotificationSender,
    send_email_confirmation_quietly,
)
from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.app.validation import normalize_email, validate_username
from src.domain.entities import TokenScope
from .dtos import AccountInfo, UpdateAccountCommand
from .uniqueness import find_conflicting_fields

logger = logging.getLogger(__name__)


class UpdateAccountUseCase:
    """
    Business Rules:
    - Caller must own the account or be an application admin
    - Only session tokens authorize updates
    - New email/username must not belong to a different account
    - Changing the email clears is_confirmed and sends a new confirmation
    - Changing the email discards outstanding reset codes
    """

    def __init__(self, uow: UnitOfWork, notifier: NotificationSender):
        self.uow = uow
        self.notifier = notifier

    async def execute(
        self,
        account_id: UUID,
        command: UpdateAccountCommand,
        caller: TokenClaims,
    ) -> Result[AccountInfo]:
        """
        Errors:
            - UNAUTHORIZED: caller may not update this account
            - VALIDATION_ERROR: malformed fields or nothing to update
            - NOT_FOUND: account absent
            - CONFLICT: email/username taken by another account
        """
        if caller.scope != TokenScope.session or (
            caller.account_id != account_id and not caller.is_admin
        ):
            return Return.err(unauthorized_error("Token does not authorize this account"))

        if command.email is None and command.username is None:
            return Return.err(validation_error("Nothing to update"))

        email = None
        if command.email is not None:
            email_result = normalize_email(command.email)
            if email_result.is_err():
                return Return.err(email_result.error)
            email = email_result.value

        if command.username is not None:
            username_check = validate_username(command.username)
            if username_check.is_err():
                return Return.err(username_check.error)

        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(not_found_error())

            conflicts = await find_conflicting_fields(
                self.uow, email, command.username, exclude_account_id=account_id
            )
            if conflicts:
                return Return.err(conflict_error(conflicts))

            email_changed = email is not None and email != account.email
            if email_changed:
                account.email = email
                account.is_confirmed = False
            if command.username is not None:
                account.username = command.username
            account.updated_at = datetime.utcnow()

            try:
                account = await self.uow.accounts.update(account)
            except DuplicateAccountError as e:
                return Return.err(conflict_error(e.fields))

            if email_changed:
                await self.uow.reset_codes.delete_by_account_id(account_id)

            await self.uow.commit()

        logger.info(f"Account updated: {account_id} (by {caller.account_id})")
        if email_changed:
            await send_email_confirmation_quietly(self.notifier, account.email, account.id)

        return Return.ok(AccountInfo.from_account(account))
