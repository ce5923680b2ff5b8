"""
auth/service.py -- Credential service: sign-up, login and password change.

The service owns the domain rules and nothing else. Input checks live in
auth.validation, audit entries in auth.audit, persistence in auth.store; the
route handlers in api/ and web/ only translate HTTP to method calls.

Blocking work (bcrypt and the synchronous SQLAlchemy engine) runs in the
worker thread pool via run_in_threadpool so a slow hash never stalls the
event loop for other requests.

Security:
  Unknown email and wrong password raise the same InvalidCredentialsError
  with the same message. Only the audit log records which one it was.
  The unknown-email path still runs bcrypt against a dummy hash so the two
  cases also take the same time.

Layer rule: no imports from api/ or web/.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from auth.audit import AuditTrail
from auth.errors import (
    CredentialError,
    DuplicateEmailError,
    InvalidCredentialsError,
    NotFoundError,
    PersistenceError,
)
from auth.models import ClientInfo, User
from auth.passwords import burn_verify, hash_password, verify_password
from auth.store import UserStore
from auth.validation import CHANGE_PASSWORD_REQUIRED, SIGNUP_REQUIRED, check_password_length, require_fields

logger = logging.getLogger("userauth.auth")

_NO_CLIENT = ClientInfo()


@contextmanager
def _storage_errors(action: str, message: str) -> Iterator[None]:
    """Convert storage and other unexpected failures into PersistenceError(message).

    CredentialErrors raised inside the block pass through unchanged. The
    driver's error text goes to the log only.
    """
    try:
        yield
    except CredentialError:
        raise
    except SQLAlchemyError as exc:
        logger.error("Error %s: %s", action, exc)
        raise PersistenceError(message) from exc
    except Exception as exc:
        logger.exception("Unexpected error %s", action)
        raise PersistenceError(message) from exc


class CredentialService:
    """Register, authenticate and change passwords against a UserStore.

    The store is injected so tests can hand in an in-memory database or a
    MagicMock.
    """

    def __init__(self, store: UserStore, audit: AuditTrail | None = None, rounds: int | None = None) -> None:
        self.store = store
        self.audit = audit or AuditTrail()
        self.rounds = rounds

    async def register(self, email: str | None, password: str | None, client: ClientInfo = _NO_CLIENT) -> int:
        """Create a new account and return its id.

        Raises ValidationError, DuplicateEmailError or PersistenceError.
        """
        require_fields(SIGNUP_REQUIRED, email, password)
        check_password_length(password)

        with _storage_errors("signing up", "Sign-up failed"):
            existing = await run_in_threadpool(self.store.get_by_email, email)
            if existing is not None:
                self.audit.signup_duplicate(email, client)
                raise DuplicateEmailError()

            hashed = await run_in_threadpool(hash_password, password, self.rounds)
            try:
                user_id = await run_in_threadpool(self.store.create_user, User(email=email, password_hash=hashed))
            except IntegrityError as exc:
                # Lost the race against a concurrent sign-up for the same email.
                self.audit.signup_duplicate(email, client)
                raise DuplicateEmailError() from exc

        self.audit.signup_succeeded(user_id, email, client)
        return user_id

    async def authenticate(self, email: str | None, password: str | None, client: ClientInfo = _NO_CLIENT) -> User:
        """Return the matching user or raise InvalidCredentialsError.

        No token or session is created here; that is the caller's business.
        """
        require_fields(SIGNUP_REQUIRED, email, password)

        with _storage_errors("logging in", "Login failed"):
            user = await run_in_threadpool(self.store.get_by_email, email)

            if user is None:
                await run_in_threadpool(burn_verify, password)
                self.audit.login_failed("User not found", email, client)
                raise InvalidCredentialsError()

            if not await run_in_threadpool(verify_password, password, user.password_hash):
                self.audit.login_failed("Incorrect password", email, client)
                raise InvalidCredentialsError()

        self.audit.login_succeeded(user.id, email, client)
        return user

    async def change_password(
        self,
        email: str | None,
        old_password: str | None,
        new_password: str | None,
        client: ClientInfo = _NO_CLIENT,
    ) -> None:
        """Replace the stored hash after checking the old password.

        Raises ValidationError, NotFoundError, InvalidCredentialsError or
        PersistenceError.
        """
        require_fields(CHANGE_PASSWORD_REQUIRED, email, old_password, new_password)
        check_password_length(new_password)

        with _storage_errors("changing password", "Failed to change password"):
            user = await run_in_threadpool(self.store.get_by_email, email)
            if user is None:
                self.audit.password_change_failed("User not found", email, client)
                raise NotFoundError()

            if not await run_in_threadpool(verify_password, old_password, user.password_hash):
                self.audit.password_change_failed("Incorrect old password", email, client)
                raise InvalidCredentialsError("Invalid old password")

            hashed = await run_in_threadpool(hash_password, new_password, self.rounds)
            await run_in_threadpool(self.store.update_password, email, hashed)

        self.audit.password_changed(user.id, email, client)
