"""
Delete Account Use Case

Removes an account together with its sessions and reset codes.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import not_found_error, unauthorized_error
from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import TokenScope

logger = logging.getLogger(__name__)


class DeleteAccountUseCase:
    """
    Business Rules:
    - Only a session token of the same account may delete it
    - Sessions and reset codes go in the same transaction, so every
      outstanding token, renewal identifier and code fails on next use
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID, caller: TokenClaims) -> Result[None]:
        """
        Errors:
            - UNAUTHORIZED: token does not belong to account_id
            - NOT_FOUND: account absent
        """
        if caller.scope != TokenScope.session or caller.account_id != account_id:
            return Return.err(unauthorized_error("Token does not authorize this account"))

        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(not_found_error())

            codes = await self.uow.reset_codes.delete_by_account_id(account_id)
            sessions = await self.uow.sessions.delete_all_by_account_id(account_id)
            await self.uow.accounts.delete(account)

            await self.uow.commit()

        logger.info(
            f"Account deleted: {account_id} ({sessions} sessions, {codes} reset codes removed)"
        )
        return Return.ok(None)
