"""
auth/errors.py -- Error taxonomy for the credential service.

Every error carries the HTTP status it maps to and the message shown to the
caller. The API layer renders them as {"message": ...}; nothing else about
the failure ever leaves the server.
"""

from __future__ import annotations


class CredentialError(Exception):
    """Base class for failures the caller is allowed to see."""

    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CredentialError):
    status_code = 400
    default_message = "Email and password are required"


class DuplicateEmailError(CredentialError):
    status_code = 400
    default_message = "Email already exists"


class InvalidCredentialsError(CredentialError):
    """Wrong password or unknown email. The two cases share one message."""

    status_code = 401
    default_message = "Invalid email or password"


class NotFoundError(CredentialError):
    status_code = 404
    default_message = "User not found"


class PersistenceError(CredentialError):
    """Storage or other unexpected failure. Detail is logged, never returned."""

    status_code = 500
    default_message = "Request failed"
