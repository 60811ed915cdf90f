"""
Authentication Use Case DTOs (Data Transfer Objects)

Response classes for token and reset-code flows.
"""

from datetime import datetime

from pydantic import BaseModel

from src.app.use_cases.accounts.dtos import AccountInfo


class LoginResponse(BaseModel):
    """Response for login and federated login"""

    account: AccountInfo
    access_token: str
    refresh_token: str
    session_id: str
    expires_at: datetime


class ExternalLoginResponse(LoginResponse):
    """Federated login also tells whether the account was just created"""

    is_new_account: bool


class RenewTokenResponse(BaseModel):
    """Response for renew token use case"""

    access_token: str
    refresh_token: str
    session_id: str
    expires_at: datetime


class RequestResetCodeResponse(BaseModel):
    """Response for reset code request; identical for known and unknown emails"""

    status: str
    message: str


class VerifyResetCodeResponse(BaseModel):
    """Password-reset-scoped token returned after a code is consumed"""

    access_token: str
    scope: str
