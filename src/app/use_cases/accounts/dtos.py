"""
Account Use Case DTOs (Data Transfer Objects)

Command and Response classes for the account lifecycle.
"""

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Account


# ============================================================================
# Command DTOs
# ============================================================================


class CreateAccountCommand(BaseModel):
    """Registration intent, created by the API layer after request parsing"""

    email: str
    username: str
    password: str


class UpdateAccountCommand(BaseModel):
    """Fields to change; None means leave as is"""

    email: Optional[str] = None
    username: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class AccountInfo(BaseModel):
    """Public identity of an account"""

    id: str
    email: str
    username: str
    is_confirmed: bool
    is_application_admin: bool = False

    @classmethod
    def from_account(cls, account: Account) -> "AccountInfo":
        return cls(
            id=str(account.id),
            email=account.email,
            username=account.username,
            is_confirmed=account.is_confirmed,
            is_application_admin=account.is_application_admin,
        )


class ValidateEmailResponse(BaseModel):
    """Response for email confirmation use case"""

    status: str
    message: str


class ChangePasswordResponse(BaseModel):
    """Response for change password use case"""

    status: str
    message: str
    sessions_revoked: int


class AvailabilityResponse(BaseModel):
    """Response for uniqueness check when nothing collides"""

    available: bool
