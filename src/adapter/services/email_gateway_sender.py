"""
Email gateway sender for account notifications.

Posts JSON to an HTTP email gateway, authenticated with an API key and an
HMAC-SHA256 signature over the exact request body.
"""

import hashlib
import hmac
import json
import logging
from uuid import UUID

import httpx

from src.app.services.notification_sender import NotificationError, NotificationSender

logger = logging.getLogger(__name__)


class EmailGatewaySender(NotificationSender):
    """Send account emails via HTTP gateway with HMAC signature verification."""

    def __init__(
        self,
        gateway_url: str,
        api_key: str,
        hmac_secret: str,
        frontend_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport = None,
    ):
        """
        Initialize with gateway credentials.

        Args:
            gateway_url: Full URL to the email gateway endpoint
            api_key: API key for X-API-Key header
            hmac_secret: Secret for HMAC-SHA256 signature
            frontend_url: Base URL used to build links inside emails
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)

        Raises:
            ValueError: If any credential is empty
        """
        if not gateway_url:
            raise ValueError("gateway_url is required")
        if not api_key:
            raise ValueError("api_key is required")
        if not hmac_secret:
            raise ValueError("hmac_secret is required")

        self.gateway_url = gateway_url
        self.api_key = api_key
        self.hmac_secret = hmac_secret
        self.frontend_url = frontend_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _sign(self, body: str) -> str:
        return hmac.new(
            self.hmac_secret.encode("utf-8"),
            body.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

    async def _sign_and_send(self, payload: dict) -> None:
        """
        Sign payload with HMAC and send to gateway.

        Raises:
            NotificationError: On any failure
        """
        body = json.dumps(payload, separators=(",", ":"))
        headers = {
            "Content-Type": "application/json",
            "X-API-Key": self.api_key,
            "X-Signature": self._sign(body),
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(self.gateway_url, content=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Email gateway connection failed: {e}")
            raise NotificationError(f"Connection failed: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Email gateway error: HTTP {response.status_code}")
            raise NotificationError(f"Gateway error: HTTP {response.status_code}")

    async def send_reset_code(self, email: str, code: str) -> None:
        payload = {
            "type": "reset_password_code",
            "email": email,
            "code": code,
            "link": f"{self.frontend_url}/recovery-password/check-code?email={email}",
        }
        await self._sign_and_send(payload)
        logger.info(f"Reset code email sent to {email}")

    async def send_email_confirmation(self, email: str, account_id: UUID) -> None:
        payload = {
            "type": "email_confirmation",
            "email": email,
            "account_id": str(account_id),
        }
        await self._sign_and_send(payload)
        logger.info(f"Confirmation email sent to {email}")


class DisabledNotificationSender(NotificationSender):
    """Used when DISABLE_EMAILS is set: nothing leaves the process."""

    async def send_reset_code(self, email: str, code: str) -> None:
        logger.info(f"Emails disabled, reset code for {email} not sent")

    async def send_email_confirmation(self, email: str, account_id: UUID) -> None:
        logger.info(f"Emails disabled, confirmation for {email} not sent")
