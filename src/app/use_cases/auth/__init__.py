"""
Authentication Use Cases

Login, token renewal/validation/logout and password reset codes.
"""

from .login_use_case import LoginUseCase
from .external_login_use_case import ExternalLoginUseCase
from .renew_token_use_case import RenewTokenUseCase
from .validate_token_use_case import ValidateTokenUseCase
from .logout_use_case import LogoutUseCase
from .request_reset_code_use_case import RequestResetCodeUseCase
from .verify_reset_code_use_case import VerifyResetCodeUseCase
from .dtos import (
    ExternalLoginResponse,
    LoginResponse,
    RenewTokenResponse,
    RequestResetCodeResponse,
    VerifyResetCodeResponse,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "ExternalLoginUseCase",
    "RenewTokenUseCase",
    "ValidateTokenUseCase",
    "LogoutUseCase",
    "RequestResetCodeUseCase",
    "VerifyResetCodeUseCase",
    # DTOs - Responses
    "LoginResponse",
    "ExternalLoginResponse",
    "RenewTokenResponse",
    "RequestResetCodeResponse",
    "VerifyResetCodeResponse",
]
