"""
Validate Token Use Case

Resolves a bearer token to the caller's claims; used once per request at
the API boundary.
"""

from libs.result import Result
from src.app.services.token_service import TokenClaims, TokenService
from src.app.services.unit_of_work import UnitOfWork


class ValidateTokenUseCase:
    def __init__(self, uow: UnitOfWork, tokens: TokenService):
        self.uow = uow
        self.tokens = tokens

    async def execute(self, token: str) -> Result[TokenClaims]:
        async with self.uow:
            return await self.tokens.validate_token(token)
