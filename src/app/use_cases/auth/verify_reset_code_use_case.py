"""
Verify Reset Code Use Case

Consumes a reset code and hands back a token that can only set a new
password.
"""

from libs.result import Result, Return
from src.app.services.reset_code_manager import ResetCodeManager
from src.app.services.unit_of_work import UnitOfWork
from src.app.validation import normalize_email
from src.domain.entities import TokenScope
from .dtos import VerifyResetCodeResponse


class VerifyResetCodeUseCase:
    def __init__(self, uow: UnitOfWork, reset_codes: ResetCodeManager):
        self.uow = uow
        self.reset_codes = reset_codes

    async def execute(self, email: str, code: str) -> Result[VerifyResetCodeResponse]:
        """
        Errors:
            - VALIDATION_ERROR: malformed email
            - INVALID_CODE: wrong, expired, superseded or already used code
        """
        email_result = normalize_email(email)
        if email_result.is_err():
            return Return.err(email_result.error)

        async with self.uow:
            result = await self.reset_codes.verify_reset_code(email_result.value, code)
            if result.is_err():
                return Return.err(result.error)

            await self.uow.commit()

        return Return.ok(
            VerifyResetCodeResponse(
                access_token=result.value,
                scope=TokenScope.password_reset.value,
            )
        )
