from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class ExternalIdentityError(Exception):
    """Raised when the identity provider cannot be reached or answers garbage"""


class ExternalIdentity(BaseModel):
    """Identity claims asserted by an external provider"""

    email: str
    username: str
    verified: bool


class ExternalIdentityVerifier(ABC):
    """Exchanges an externally issued token for identity claims"""

    @abstractmethod
    async def exchange(self, external_token: str) -> Optional[ExternalIdentity]:
        """Return the identity, or None if the provider rejects the token"""
        pass
