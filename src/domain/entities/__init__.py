"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .enums import TokenScope

from .account import Account
from .session import Session
from .reset_code import ResetCode

__all__ = [
    # Enums
    "TokenScope",
    # Entities
    "Account",
    "Session",
    "ResetCode",
]
