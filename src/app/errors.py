"""
Application error codes.

Every failed use case returns one of these codes inside a
``libs.result.Error``; the API layer maps each code to an HTTP status.
"""

from typing import List, Optional

from libs.result import Error

VALIDATION_ERROR = "VALIDATION_ERROR"
CONFLICT = "CONFLICT"
UNAUTHORIZED = "UNAUTHORIZED"
NOT_FOUND = "NOT_FOUND"
EXTERNAL_AUTH_ERROR = "EXTERNAL_AUTH_ERROR"
INVALID_CODE = "INVALID_CODE"
INTERNAL_ERROR = "INTERNAL_ERROR"


def validation_error(message: str, field: Optional[str] = None) -> Error:
    return Error(VALIDATION_ERROR, message, {"field": field} if field else None)


def conflict_error(fields: List[str]) -> Error:
    return Error(
        CONFLICT,
        f"{' and '.join(fields)} already in use",
        {"fields": fields},
    )


def unauthorized_error(message: str = "Invalid, expired or revoked token") -> Error:
    return Error(UNAUTHORIZED, message)


def not_found_error(message: str = "Account not found") -> Error:
    return Error(NOT_FOUND, message)


def external_auth_error(message: str = "External token rejected") -> Error:
    return Error(EXTERNAL_AUTH_ERROR, message)


def invalid_code_error() -> Error:
    return Error(INVALID_CODE, "Invalid or expired reset code")

