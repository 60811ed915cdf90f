from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Optional


class TokenSigner(ABC):
    """Tamper-evident token signing primitive"""

    @abstractmethod
    def sign(self, claims: dict, ttl: timedelta) -> str:
        """Sign claims; the token expires ttl after issue time"""
        pass

    @abstractmethod
    def verify(self, token: str) -> Optional[dict]:
        """Return decoded claims, or None if the signature is bad or the token expired"""
        pass
