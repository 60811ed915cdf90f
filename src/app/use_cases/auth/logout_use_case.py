"""
Logout Use Case

Revokes the presented session token and its renewal identifier.
Other sessions of the same account stay active.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import unauthorized_error
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import TokenScope

logger = logging.getLogger(__name__)


class LogoutUseCase:
    def __init__(self, uow: UnitOfWork, tokens: TokenService):
        self.uow = uow
        self.tokens = tokens

    async def execute(self, account_id: UUID, token: str) -> Result[None]:
        """
        Errors:
            - UNAUTHORIZED: invalid token, not a session token, or another account's token
        """
        async with self.uow:
            validation = await self.tokens.validate_token(token)
            if validation.is_err():
                return Return.err(validation.error)

            claims = validation.value
            if claims.scope != TokenScope.session or claims.account_id != account_id:
                return Return.err(unauthorized_error("Token does not authorize this account"))

            revocation = await self.tokens.revoke_token(token)
            if revocation.is_err():
                return Return.err(revocation.error)

            await self.uow.commit()

        logger.info(f"Logout: account {account_id}, session {claims.session_id}")
        return Return.ok(None)
