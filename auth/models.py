"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Stores and the
credential service do the work.

Layer rule: no imports from api/, web/ or core/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A registered account.

    email is the login identifier and is compared exactly (case-sensitive,
    no whitespace trimming). password_hash is the bcrypt hash stored in the
    users.password column; the plaintext is never kept.
    """

    email: str
    password_hash: str
    id: int | None = None


@dataclass(frozen=True)
class ClientInfo:
    """Caller metadata captured for the audit trail."""

    ip: str = "unknown"
    user_agent: str = ""
