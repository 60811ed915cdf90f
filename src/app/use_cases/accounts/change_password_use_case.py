"""
Change Password Use Case

Replaces an account's password hash. Reached either with a regular
session token or with the password_reset token returned by reset-code
verification.
"""

import logging
from datetime import datetime
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import not_found_error, unauthorized_error
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.app.validation import validate_password_strength
from .dtos import ChangePasswordResponse

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Business Rules:
    - Token must belong to the same account (session or password_reset scope)
    - New password must meet the strength policy
    - Every other session of the account is revoked; all of them when the
      change comes through a password_reset token
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(
        self,
        account_id: UUID,
        new_password: str,
        caller: TokenClaims,
    ) -> Result[ChangePasswordResponse]:
        """
        Errors:
            - UNAUTHORIZED: token does not belong to account_id
            - VALIDATION_ERROR: weak password
            - NOT_FOUND: account absent
        """
        if caller.account_id != account_id:
            return Return.err(unauthorized_error("Token does not authorize this account"))

        password_validation = validate_password_strength(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(not_found_error())

            account.password_hash = self.hasher.hash(new_password)
            account.updated_at = datetime.utcnow()
            await self.uow.accounts.update(account)

            if caller.session_id is not None:
                revoked_count = await self.uow.sessions.revoke_all_except_session(
                    account_id, caller.session_id
                )
            else:
                revoked_count = await self.uow.sessions.revoke_all_by_account_id(account_id)

            await self.uow.commit()

        logger.info(f"Password changed for account {account_id}, {revoked_count} sessions revoked")
        return Return.ok(
            ChangePasswordResponse(
                status="success",
                message="Password has been changed successfully",
                sessions_revoked=revoked_count,
            )
        )
