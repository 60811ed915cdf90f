from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from src.app.services.token_signer import TokenSigner


class JwtTokenSigner(TokenSigner):
    """HS256 JWT signer built on python-jose"""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def sign(self, claims: dict, ttl: timedelta) -> str:
        """
        Generate a signed JWT

        Args:
            claims: Payload claims (sub, scope, ...)
            ttl: Lifetime; exp = iat + ttl

        Returns:
            JWT token string
        """
        if ttl <= timedelta(0):
            raise ValueError("Token TTL must be positive")

        now = datetime.now(UTC)
        payload = dict(claims)
        payload["iat"] = now
        payload["exp"] = now + ttl
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Optional[dict]:
        """
        Verify and decode JWT token

        Args:
            token: JWT token string

        Returns:
            Decoded payload dict or None if invalid or expired
        """
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            return None
