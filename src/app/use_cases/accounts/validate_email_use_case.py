"""
Validate Email Use Case

Marks an account's email as confirmed.
"""

import logging
from datetime import datetime
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import not_found_error
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ValidateEmailResponse

logger = logging.getLogger(__name__)


class ValidateEmailUseCase:
    """
    Business Rules:
    - Sets is_confirmed = True
    - Already confirmed accounts return success (idempotent)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[ValidateEmailResponse]:
        """
        Errors:
            - NOT_FOUND: no account with this ID
        """
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(not_found_error())

            if account.is_confirmed:
                return Return.ok(
                    ValidateEmailResponse(status="confirmed", message="Email is already confirmed")
                )

            account.is_confirmed = True
            account.updated_at = datetime.utcnow()
            await self.uow.accounts.update(account)

            await self.uow.commit()

        logger.info(f"Account email confirmed: {account_id}")
        return Return.ok(
            ValidateEmailResponse(status="confirmed", message="Email successfully confirmed")
        )
