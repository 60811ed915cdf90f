"""
Domain Enums

Enumeration types used across domain entities and token claims.
"""

from enum import Enum


class TokenScope(str, Enum):
    """What a signed token entitles its bearer to"""

    session = "session"
    password_reset = "password_reset"
