"""
tests/conftest.py -- Shared test fixtures for userauth tests.

This module provides:
  - make_test_store(): isolated named shared-memory SQLite UserStore
  - _patch_lifespan(): wires a test store into app.state, bypassing real startup
  - store / service: per-test store and CredentialService for unit tests
  - api_client: TestClient for JSON API integration tests
  - web_client: TestClient with follow_redirects=False for web route tests

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because both TestClient and the service's run_in_threadpool calls reach the
store from worker threads. Plain :memory: DBs are per-connection and would
present a blank schema to each worker thread. The named URI format
(file:name?mode=memory&cache=shared&uri=true) shares one in-memory instance
across all connections in the same process.

Environment must be set before any core/auth import:
  DEBUG=true            -- get_settings() auto-generates SECRET_KEY
  BCRYPT_ROUNDS=4       -- keeps hashing fast
  LOGIN_RATE_LIMIT=5/minute -- low enough for tests to trip; counters reset per test
  GLOBAL_RATE_LIMIT=1000/minute -- module-scoped clients make many requests
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Generator
from contextlib import asynccontextmanager

os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOGIN_RATE_LIMIT", "5/minute")
os.environ.setdefault("GLOBAL_RATE_LIMIT", "1000/minute")

import pytest
from fastapi.testclient import TestClient

from api.main import app, build_credential_service
from auth.audit import AuditTrail
from auth.service import CredentialService
from auth.store import UserStore
from core.limiter import limiter

# Mount the web router once; asgi.py does this in production. Guard against
# double registration if conftest is imported more than once.
from web.routes import router as web_router

if not any(getattr(r, "path", None) == "/dashboard" for r in app.routes):
    app.include_router(web_router, tags=["Web UI"])


# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


def make_test_store(name: str | None = None) -> UserStore:
    """Create an isolated named shared-memory SQLite store."""
    db_name = name or f"test_users_{uuid.uuid4().hex}"
    return UserStore(db_url=f"sqlite:///file:{db_name}?mode=memory&cache=shared&uri=true")


def _patch_lifespan(user_store: UserStore):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        app.state.credentials = build_credential_service(user_store)
        yield

    return test_lifespan


# ---------------------------------------------------------------------------
# Rate limits
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> Generator[None, None, None]:
    """Start every test with empty limiter counters."""
    limiter.reset()
    yield
    limiter.reset()


# ---------------------------------------------------------------------------
# Unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store() -> Generator[UserStore, None, None]:
    s = make_test_store()
    yield s
    s.close()


@pytest.fixture
def service(store: UserStore) -> CredentialService:
    return CredentialService(store, audit=AuditTrail(), rounds=4)


# ---------------------------------------------------------------------------
# Module-scoped fixtures -- one TestClient per test module for speed
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def api_client() -> Generator[tuple[TestClient, UserStore], None, None]:
    """Yield (client, store) for API integration tests.

    The TestClient uses the real FastAPI app with a patched lifespan, so
    tests hit real route handlers and middleware but an isolated database.
    """
    user_store = make_test_store(f"test_api_{uuid.uuid4().hex}")
    app.router.lifespan_context = _patch_lifespan(user_store)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client, user_store

    user_store.close()


@pytest.fixture(scope="module")
def web_client() -> Generator[tuple[TestClient, UserStore], None, None]:
    """Yield (client, store) for web route tests.

    follow_redirects=False: tests assert on redirect locations, which are
    invisible once the client follows them.
    """
    user_store = make_test_store(f"test_web_{uuid.uuid4().hex}")
    app.router.lifespan_context = _patch_lifespan(user_store)

    with TestClient(app, follow_redirects=False, raise_server_exceptions=True) as client:
        yield client, user_store

    user_store.close()
