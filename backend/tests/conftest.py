"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt  # PyJWT
import pytest

import api.dependencies as dependencies
from api.dependencies import ServiceContainer, reset_container
from modules.accounts.models import EnrichmentData
from shared.config import Settings, get_settings


# Session signing secret used by every test container
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


class FixedClock:
    """Controllable time source for services that take a Clock."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or datetime(2025, 3, 10, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class RecordingDispatcher:
    """Notification dispatcher that remembers what it was asked to send."""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.sent: list[tuple[str, str]] = []
        self.summaries: list[tuple[str, str, EnrichmentData]] = []

    async def send(self, address: str, token: str) -> bool:
        self.sent.append((address, token))
        return self.succeed

    async def send_enrichment_summary(self, address: str, full_name: str, data: EnrichmentData) -> bool:
        self.summaries.append((address, full_name, data))
        return self.succeed

    @property
    def last_token(self) -> str:
        return self.sent[-1][1]


class StaticEnrichmentProvider:
    """Enrichment provider returning a fixed record (or None)."""

    def __init__(self, data: Optional[EnrichmentData] = None):
        self.data = data
        self.contexts = []

    async def fetch(self, context):
        self.contexts.append(context)
        return self.data


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@vit.ac.in",
    expired: bool = False,
    email_verified: bool = True,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a session token the way JWTSessionIssuer does.

    Args:
        user_id: Account ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the session claims a verified email
        secret: Signing key

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_verified": email_verified,
        "iat": int(now.timestamp()) - (7200 if expired else 0),
        "exp": int(exp.timestamp()),
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def make_test_settings(**overrides) -> Settings:
    """Settings for an isolated in-memory app; ignores any local .env file."""
    values = {
        "storage_backend": "memory",
        "session_jwt_secret": TEST_JWT_SECRET,
        "smtp_host": "",
        "bcrypt_rounds": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the settings cache and service container around each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def test_settings() -> Settings:
    return make_test_settings()


@pytest.fixture
def container(test_settings: Settings, monkeypatch) -> ServiceContainer:
    """Install a container built from test settings as the app's container."""
    test_container = ServiceContainer(settings=test_settings)
    monkeypatch.setattr(dependencies, "_container", test_container)
    return test_container


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def auth_token(test_user_id: str) -> str:
    """Create a valid session token for testing."""
    return create_test_token(user_id=test_user_id)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
