"""
OIDC identity verifier.

Treats the external token as an opaque bearer credential and asks the
provider's userinfo endpoint who it belongs to.
"""

import logging
from typing import Optional

import httpx

from src.app.services.identity_verifier import (
    ExternalIdentity,
    ExternalIdentityError,
    ExternalIdentityVerifier,
)

logger = logging.getLogger(__name__)


class OidcUserInfoVerifier(ExternalIdentityVerifier):
    def __init__(
        self,
        userinfo_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport = None,
    ):
        if not userinfo_url:
            raise ValueError("userinfo_url is required")
        self.userinfo_url = userinfo_url
        self.timeout = timeout
        self.transport = transport

    async def exchange(self, external_token: str) -> Optional[ExternalIdentity]:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(
                    self.userinfo_url,
                    headers={"Authorization": f"Bearer {external_token}"},
                )
        except httpx.HTTPError as e:
            logger.error(f"Identity provider unreachable: {e}")
            raise ExternalIdentityError(f"Connection failed: {e}") from e

        if response.status_code in (400, 401, 403):
            return None
        if response.status_code != 200:
            raise ExternalIdentityError(f"Identity provider error: HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise ExternalIdentityError("Invalid response from identity provider") from e

        email = data.get("email")
        if not email:
            return None

        return ExternalIdentity(
            email=email,
            username=data.get("preferred_username") or email.split("@")[0],
            verified=bool(data.get("email_verified", False)),
        )
