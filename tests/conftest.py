"""
tests/conftest.py -- Shared test fixtures for the portal integration tests.

This module provides:
  - _make_test_stores(): creates isolated in-memory DBs for users + portal
  - _patch_lifespan(): wires test stores into app.state, bypassing real startup
  - api_client: TestClient plus a valid Bearer token and the portal store

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker thread.
The named URI format (file:name?mode=memory&cache=shared&uri=true) shares
one in-memory instance across all connections in the same process.

Environment must be set before any app import: DEBUG lets get_settings()
auto-generate SECRET_KEY, the rate limiter is switched off so repeated logins
are not throttled, and the TestClient host is allowed.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager

# CRITICAL: Set before any auth/core/api import.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ALLOWED_HOSTS", '["testserver", "localhost"]')

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.models import User
from auth.store import UserStore
from auth.tokens import create_access_token, hash_password
from portal.store import PortalStore

TEST_USERNAME = "christopher_phillips"
TEST_PASSWORD = "christy@123"


# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


def shared_memory_url(name: str) -> str:
    return f"sqlite:///file:{name}?mode=memory&cache=shared&uri=true"


def _make_test_stores(db_suffix: str) -> tuple[UserStore, PortalStore]:
    """Create isolated named shared-memory SQLite stores for one test module.

    Both stores point at the same database, as in production.

    Args:
        db_suffix: Unique string appended to the DB name so test modules
                   don't share state (e.g. 'api', 'health').
    """
    url = shared_memory_url(f"test_portal_{db_suffix}")
    return UserStore(db_url=url), PortalStore(db_url=url)


def _patch_lifespan(user_store: UserStore, portal: PortalStore):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        app.state.portal = portal
        yield

    return test_lifespan


def _start_client(db_suffix: str) -> tuple[UserStore, PortalStore]:
    user_store, portal = _make_test_stores(db_suffix)
    user_store.create_user(User(username=TEST_USERNAME, hashed_password=hash_password(TEST_PASSWORD)))
    app.router.lifespan_context = _patch_lifespan(user_store, portal)
    return user_store, portal


# ---------------------------------------------------------------------------
# Module-scoped fixtures -- one TestClient per test module for speed
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def api_client(request) -> Generator[tuple[TestClient, str, PortalStore], None, None]:
    """Yield (client, token, portal) for API integration tests.

    The TestClient uses the real FastAPI app with a patched lifespan so tests
    hit real route handlers, the real auth gate and real SQL, against an
    isolated in-memory database. One user (TEST_USERNAME / TEST_PASSWORD)
    exists; token is a valid Bearer credential for that user.
    """
    user_store, portal = _start_client(request.module.__name__.rsplit(".", 1)[-1])
    token = create_access_token(TEST_USERNAME)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client, token, portal

    user_store.close()
    portal.close()


@pytest.fixture
def auth_headers(api_client) -> dict[str, str]:
    _client, token, _portal = api_client
    return {"Authorization": f"Bearer {token}"}
