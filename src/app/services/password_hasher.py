from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """Slow one-way password hashing primitive"""

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        pass

    @abstractmethod
    def verify(self, plaintext: str, password_hash: str) -> bool:
        pass
