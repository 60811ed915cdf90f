"""
Request Reset Code Use Case

Issues a password reset code and emails it.
"""

import logging

from libs.result import Result, Return
from src.app.services.reset_code_manager import ResetCodeManager
from src.app.services.unit_of_work import UnitOfWork
from src.app.validation import normalize_email
from .dtos import RequestResetCodeResponse

logger = logging.getLogger(__name__)


class RequestResetCodeUseCase:
    """
    Business Rules:
    - No email enumeration: same response whether or not the email exists
    - A new code supersedes any outstanding code for the email
    - Delivery happens after commit; a failed send keeps the code
    """

    def __init__(self, uow: UnitOfWork, reset_codes: ResetCodeManager):
        self.uow = uow
        self.reset_codes = reset_codes

    async def execute(self, email: str) -> Result[RequestResetCodeResponse]:
        """
        Errors:
            - VALIDATION_ERROR: malformed email
        """
        email_result = normalize_email(email)
        if email_result.is_err():
            return Return.err(email_result.error)
        email = email_result.value

        async with self.uow:
            code = await self.reset_codes.issue_reset_code(email)
            if code is not None:
                await self.uow.commit()

        if code is not None:
            logger.info(f"Reset code issued for {email}")
            await self.reset_codes.deliver_reset_code(email, code)

        return Return.ok(
            RequestResetCodeResponse(
                status="sent",
                message="If the email exists, a reset code has been sent",
            )
        )
