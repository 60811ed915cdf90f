"""
Input validation for account fields.

Runs inside the use cases so the rules hold no matter which transport
calls them.
"""

import re

from email_validator import EmailNotValidError, validate_email

from libs.result import Result, Return
from src.app.errors import validation_error

USERNAME_PATTERN = re.compile(r"[A-Za-z0-9_.\-]{3,255}")
USERNAME_DISALLOWED = re.compile(r"[^A-Za-z0-9_.\-]")
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 72  # bcrypt ignores bytes past 72


def normalize_email(email: str) -> Result[str]:
    """Validate email syntax and return its normalized form"""
    try:
        info = validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        return Return.err(validation_error(f"Invalid email: {e}", field="email"))
    return Return.ok(info.normalized)


def validate_username(username: str) -> Result[None]:
    if not USERNAME_PATTERN.fullmatch(username or ""):
        return Return.err(
            validation_error(
                "Username must be 3-255 characters of letters, digits, '.', '_' or '-'",
                field="username",
            )
        )
    return Return.ok(None)


def validate_password_strength(password: str) -> Result[None]:
    """
    Validate password complexity.

    Requires at least 8 characters with an upper case letter, a lower case
    letter, a digit and a special character.
    """
    password = password or ""
    if len(password) < PASSWORD_MIN_LENGTH:
        return Return.err(
            validation_error("Password must be at least 8 characters long", field="password")
        )
    if len(password.encode("utf-8")) > PASSWORD_MAX_LENGTH:
        return Return.err(
            validation_error("Password must be at most 72 bytes long", field="password")
        )

    checks = (
        any(c.isupper() for c in password),
        any(c.islower() for c in password),
        any(c.isdigit() for c in password),
        any(not c.isalnum() for c in password),
    )
    if not all(checks):
        return Return.err(
            validation_error(
                "Password must contain upper and lower case letters, a digit and a special character",
                field="password",
            )
        )

    return Return.ok(None)


def username_candidate(preferred: str) -> str:
    """
    Closest valid username to a provider-supplied one.

    Disallowed characters become '_'; names shorter than 3 characters are
    padded. The result still has to be checked for uniqueness.
    """
    candidate = USERNAME_DISALLOWED.sub("_", preferred or "")[:240]
    if len(candidate) < 3:
        candidate = f"{candidate}user"
    return candidate
