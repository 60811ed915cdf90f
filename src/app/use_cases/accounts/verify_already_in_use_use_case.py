"""
Verify Already In Use Use Case

Checks whether an email or username is taken before the client submits a
registration or profile change.
"""

from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import conflict_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.validation import normalize_email
from .dtos import AvailabilityResponse
from .uniqueness import find_conflicting_fields


class VerifyAlreadyInUseUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        email: str,
        username: str,
        exclude_account_id: Optional[UUID] = None,
    ) -> Result[AvailabilityResponse]:
        """
        Errors:
            - VALIDATION_ERROR: malformed email
            - CONFLICT: details.fields names every colliding field
        """
        email_result = normalize_email(email)
        if email_result.is_err():
            return Return.err(email_result.error)

        async with self.uow:
            conflicts = await find_conflicting_fields(
                self.uow, email_result.value, username, exclude_account_id
            )

        if conflicts:
            return Return.err(conflict_error(conflicts))

        return Return.ok(AvailabilityResponse(available=True))
