"""
auth/passwords.py -- bcrypt password hashing and verification.

Security design decisions:
  bcrypt directly (no passlib wrapper). bcrypt generates a fresh random salt
       per call, so two users with the same password get different hashes. The
       cost factor comes from Settings.bcrypt_rounds (default 10).

  Verification always goes through bcrypt.checkpw(), which recomputes the hash
       with the stored salt and compares in constant time. Never compare hash
       strings by hand.

  _DUMMY_HASH enables timing equalization: the credential service verifies
       against it when the email is unknown, so response time does not reveal
       whether an account exists.

bcrypt only uses the first 72 bytes of a password and recent releases raise
ValueError for longer input. auth.validation.check_password_length() rejects
such passwords before they are hashed.

Layer rule: no imports from api/ or web/. Import from core/ is allowed.
"""

from __future__ import annotations

import bcrypt

from core.config import get_settings

_settings = get_settings()


def hash_password(plain: str, rounds: int | None = None) -> str:
    """Return a salted bcrypt hash of the given plaintext password."""
    salt = bcrypt.gensalt(rounds=rounds or _settings.bcrypt_rounds)
    return bcrypt.hashpw(plain.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash.

    A malformed stored hash raises ValueError inside bcrypt; that is treated
    as a mismatch rather than a server error.
    """
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


# Computed once at module load so the first failed login is not measurably
# slower than later ones.
_DUMMY_HASH: str = hash_password("userauth_timing_dummy")


def burn_verify(plain: str) -> None:
    """Run a full bcrypt verification whose result is discarded.

    Called on the unknown-email path so both failure paths cost the same.
    """
    verify_password(plain, _DUMMY_HASH)
