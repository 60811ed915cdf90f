from typing import Dict, List, Optional
from uuid import UUID

from src.app.services.identity_verifier import ExternalIdentity, ExternalIdentityVerifier
from src.app.services.notification_sender import NotificationSender


class RecordingNotificationSender(NotificationSender):
    """Keeps outgoing emails so tests can read reset codes and confirmations"""

    def __init__(self):
        self.reset_codes: Dict[str, str] = {}
        self.confirmations: List[tuple] = []

    async def send_reset_code(self, email: str, code: str) -> None:
        self.reset_codes[email] = code

    async def send_email_confirmation(self, email: str, account_id: UUID) -> None:
        self.confirmations.append((email, account_id))


class StaticIdentityVerifier(ExternalIdentityVerifier):
    """Accepts only the tokens registered in `identities`"""

    def __init__(self):
        self.identities: Dict[str, ExternalIdentity] = {}

    async def exchange(self, external_token: str) -> Optional[ExternalIdentity]:
        return self.identities.get(external_token)
