"""
auth/validation.py -- Input checks run before any storage access.
"""

from __future__ import annotations

from auth.errors import ValidationError

SIGNUP_REQUIRED = "Email and password are required"
CHANGE_PASSWORD_REQUIRED = "Email, old password, and new password are required"
INVALID_TEXT = "Email and password must be valid UTF-8 text"


def require_fields(message: str, *values: str | None) -> None:
    """Raise ValidationError(message) if any value is None or empty.

    Whitespace-only values count as present; the stored email is matched
    exactly, so nothing is trimmed here either. Values that cannot be
    encoded as UTF-8 (JSON allows lone surrogates) are rejected too, since
    neither bcrypt nor the database driver would accept them.
    """
    if any(not value for value in values):
        raise ValidationError(message)
    for value in values:
        _utf8(value)


def _utf8(value: str) -> bytes:
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValidationError(INVALID_TEXT) from exc


# bcrypt only looks at the first 72 bytes; recent releases refuse longer input.
MAX_PASSWORD_BYTES = 72


def check_password_length(password: str) -> None:
    if len(_utf8(password)) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
