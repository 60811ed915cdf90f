import logging
from abc import ABC, abstractmethod
from uuid import UUID

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Raised when a notification could not be handed to the delivery transport"""


class NotificationSender(ABC):
    """Outbound account emails. Callers treat delivery as fire-and-forget."""

    @abstractmethod
    async def send_reset_code(self, email: str, code: str) -> None:
        pass

    @abstractmethod
    async def send_email_confirmation(self, email: str, account_id: UUID) -> None:
        pass


async def send_email_confirmation_quietly(
    notifier: NotificationSender, email: str, account_id: UUID
) -> None:
    """Deliver a confirmation email; failures are logged, never propagated"""
    try:
        await notifier.send_email_confirmation(email, account_id)
    except NotificationError as e:
        logger.error(f"Confirmation email to {email} failed: {e}")
