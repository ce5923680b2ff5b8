"""
auth/audit.py -- Audit trail for security-relevant credential events.

Every entry goes to the "userauth.audit" logger with the email, the caller's
network address and User-Agent. Successful events are INFO; anything that
looks like probing or guessing is WARNING. The log sink is whatever the
logging configuration points at.

Internal reasons (e.g. "User not found" vs "Incorrect password") are recorded
here even though the caller only ever sees one unified message.
"""

from __future__ import annotations

import logging

from auth.models import ClientInfo

logger = logging.getLogger("userauth.audit")


class AuditTrail:
    def __init__(self, audit_failed_password_changes: bool = True, log: logging.Logger = logger) -> None:
        self.audit_failed_password_changes = audit_failed_password_changes
        self._log = log

    def signup_succeeded(self, user_id: int, email: str, client: ClientInfo) -> None:
        self._log.info(
            "Successful sign-up - User ID: %s, Email: %s, IP: %s, User-Agent: %s",
            user_id,
            email,
            client.ip,
            client.user_agent,
        )

    def signup_duplicate(self, email: str, client: ClientInfo) -> None:
        self._log.warning(
            "Suspicious sign-up attempt: Email already exists - Email: %s, IP: %s, User-Agent: %s",
            email,
            client.ip,
            client.user_agent,
        )

    def login_succeeded(self, user_id: int, email: str, client: ClientInfo) -> None:
        self._log.info(
            "Successful login - User ID: %s, Email: %s, IP: %s, User-Agent: %s",
            user_id,
            email,
            client.ip,
            client.user_agent,
        )

    def login_failed(self, reason: str, email: str, client: ClientInfo) -> None:
        self._log.warning(
            "Failed login attempt: %s - Email: %s, IP: %s, User-Agent: %s",
            reason,
            email,
            client.ip,
            client.user_agent,
        )

    def password_changed(self, user_id: int, email: str, client: ClientInfo) -> None:
        self._log.info(
            "Password changed - User ID: %s, Email: %s, IP: %s, User-Agent: %s",
            user_id,
            email,
            client.ip,
            client.user_agent,
        )

    def password_change_failed(self, reason: str, email: str, client: ClientInfo) -> None:
        """Record a rejected password change, unless disabled in settings."""
        if not self.audit_failed_password_changes:
            return
        self._log.warning(
            "Failed password change: %s - Email: %s, IP: %s, User-Agent: %s",
            reason,
            email,
            client.ip,
            client.user_agent,
        )
