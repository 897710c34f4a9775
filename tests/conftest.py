"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It sets the TESTING environment variable so settings never read a local
.env file, and provides an isolated app wired to in-memory collaborators.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["TESTING"] = "true"
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("AUTH_PROVIDER", "memory")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from board_api.adapters.identity.base import SessionUser
from board_api.adapters.identity.in_memory import InMemorySessionProvider
from board_api.adapters.rate_limit.token_bucket import InMemoryTokenBucketRateLimiter
from board_api.adapters.store.in_memory import InMemoryBlobStorage, InMemoryDocumentStore
from board_api.api.deps import ServiceContainer, build_container
from board_api.core.app_factory import create_app
from board_api.core.identity import AdminPolicy, Principal
from board_api.core.rate_limit import RATE_LIMIT_DEFS

ALICE = SessionUser(id="u1", name="Alice", email="alice@example.com")
BOB = SessionUser(id="u2", name="Bob", email="bob@example.com")
ROOT = SessionUser(id="u-admin", name="Root", email="root@example.com")


@pytest.fixture
def clock() -> Mock:
    """Controllable monotonic clock for the token bucket (seconds)."""
    return Mock(return_value=1_000.0)


@pytest.fixture
def limiter(clock: Mock) -> InMemoryTokenBucketRateLimiter:
    return InMemoryTokenBucketRateLimiter(RATE_LIMIT_DEFS.values(), clock=clock)


@pytest.fixture
def session_provider() -> InMemorySessionProvider:
    provider = InMemorySessionProvider()
    provider.create_session(ALICE, token="alice-token")
    provider.create_session(BOB, token="bob-token")
    provider.create_session(ROOT, token="root-token")
    return provider


@pytest.fixture
def admin_policy() -> AdminPolicy:
    return AdminPolicy([ROOT.email])


@pytest.fixture
def container(
    session_provider: InMemorySessionProvider,
    admin_policy: AdminPolicy,
    limiter: InMemoryTokenBucketRateLimiter,
) -> ServiceContainer:
    return build_container(
        session_provider=session_provider,
        admin_policy=admin_policy,
        limiter=limiter,
        store=InMemoryDocumentStore(),
        blobs=InMemoryBlobStorage(),
    )


@pytest.fixture
def client(container: ServiceContainer) -> TestClient:
    """Test client over an app with isolated in-memory collaborators."""
    return TestClient(create_app(container))


@pytest.fixture
def alice_headers() -> dict[str, str]:
    return {"Authorization": "Bearer alice-token"}


@pytest.fixture
def bob_headers() -> dict[str, str]:
    return {"Authorization": "Bearer bob-token"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": "Bearer root-token"}


@pytest.fixture
def alice() -> Principal:
    return Principal(id=ALICE.id, name=ALICE.name, email=ALICE.email)


@pytest.fixture
def bob() -> Principal:
    return Principal(id=BOB.id, name=BOB.name, email=BOB.email)


@pytest.fixture
def admin() -> Principal:
    return Principal(id=ROOT.id, name=ROOT.name, email=ROOT.email, role="admin")
