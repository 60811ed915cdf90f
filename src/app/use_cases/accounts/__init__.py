"""
Account Use Cases

Account lifecycle: registration, confirmation, uniqueness, profile,
password and deletion.
"""

from .create_account_use_case import CreateAccountUseCase
from .validate_email_use_case import ValidateEmailUseCase
from .verify_already_in_use_use_case import VerifyAlreadyInUseUseCase
from .update_account_use_case import UpdateAccountUseCase
from .change_password_use_case import ChangePasswordUseCase
from .delete_account_use_case import DeleteAccountUseCase
from .dtos import (
    AccountInfo,
    AvailabilityResponse,
    ChangePasswordResponse,
    CreateAccountCommand,
    UpdateAccountCommand,
    ValidateEmailResponse,
)

__all__ = [
    # Use Cases
    "CreateAccountUseCase",
    "ValidateEmailUseCase",
    "VerifyAlreadyInUseUseCase",
    "UpdateAccountUseCase",
    "ChangePasswordUseCase",
    "DeleteAccountUseCase",
    # DTOs - Commands
    "CreateAccountCommand",
    "UpdateAccountCommand",
    # DTOs - Responses
    "AccountInfo",
    "AvailabilityResponse",
    "ChangePasswordResponse",
    "ValidateEmailResponse",
]
