"""Unit tests for auth/store.py -- UserStore queries.

Covers:
- create_user() returns the assigned id; get_by_email() maps rows
- UNIQUE(email) rejects a second insert with IntegrityError
- Email lookup is exact (case-sensitive)
- update_password() replaces only the keyed row and reports misses
- ping() and count_users()
"""

import pytest
from sqlalchemy.exc import IntegrityError

from auth.models import User
from auth.store import UserStore


def test_create_and_fetch(store: UserStore):
    uid = store.create_user(User(email="a@x.com", password_hash="h1"))
    assert isinstance(uid, int)

    by_email = store.get_by_email("a@x.com")
    assert by_email == User(id=uid, email="a@x.com", password_hash="h1")


def test_missing_user_returns_none(store: UserStore):
    assert store.get_by_email("nobody@x.com") is None


def test_duplicate_email_violates_unique_constraint(store: UserStore):
    store.create_user(User(email="dup@x.com", password_hash="h1"))
    with pytest.raises(IntegrityError):
        store.create_user(User(email="dup@x.com", password_hash="h2"))
    assert store.count_users() == 1


def test_email_lookup_is_case_sensitive(store: UserStore):
    store.create_user(User(email="Case@x.com", password_hash="h1"))
    assert store.get_by_email("case@x.com") is None
    assert store.get_by_email("Case@x.com") is not None


def test_update_password_targets_single_row(store: UserStore):
    store.create_user(User(email="one@x.com", password_hash="h1"))
    store.create_user(User(email="two@x.com", password_hash="h2"))

    assert store.update_password("one@x.com", "new-hash") is True
    assert store.get_by_email("one@x.com").password_hash == "new-hash"
    assert store.get_by_email("two@x.com").password_hash == "h2"


def test_update_password_unknown_email(store: UserStore):
    assert store.update_password("ghost@x.com", "h") is False


def test_ping_and_count(store: UserStore):
    assert store.ping() is True
    assert store.count_users() == 0
    store.create_user(User(email="a@x.com", password_hash="h1"))
    assert store.count_users() == 1
