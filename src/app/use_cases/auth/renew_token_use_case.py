"""
Renew Token Use Case

Exchanges a renewal identifier for a new token pair (rotation).
"""

from libs.result import Result, Return
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from .dtos import RenewTokenResponse


class RenewTokenUseCase:
    def __init__(self, uow: UnitOfWork, tokens: TokenService):
        self.uow = uow
        self.tokens = tokens

    async def execute(self, refresh_token: str) -> Result[RenewTokenResponse]:
        """
        Errors:
            - UNAUTHORIZED: unknown, reused, revoked or expired renewal identifier
        """
        async with self.uow:
            result = await self.tokens.renew_token(refresh_token)
            if result.is_err():
                return Return.err(result.error)

            await self.uow.commit()

        issued = result.value
        return Return.ok(
            RenewTokenResponse(
                access_token=issued.access_token,
                refresh_token=issued.refresh_token,
                session_id=issued.session_id,
                expires_at=issued.expires_at,
            )
        )
