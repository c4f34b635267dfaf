"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timedelta, timezone

from modules.auth.directory import seed_demo_directory
from modules.auth.passwords import BcryptPasswordHasher
from modules.auth.service import AuthService, reset_auth_service
from modules.auth.tokens import JWTTokenIssuer
from shared.config import Settings, get_settings


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only-0123456789"

# Minimum bcrypt cost keeps the suite fast
TEST_BCRYPT_ROUNDS = 4


class FakeClock:
    """Settable clock for expiry tests."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture(autouse=True)
def reset_auth_singleton():
    """Reset the auth service singleton before and after each test."""
    reset_auth_service()
    get_settings.cache_clear()
    yield
    reset_auth_service()
    get_settings.cache_clear()


@pytest.fixture
def jwt_secret() -> str:
    return TEST_JWT_SECRET


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment's .env file."""
    return Settings(
        _env_file=None,
        environment="test",
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=TEST_BCRYPT_ROUNDS,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def issuer(clock: FakeClock) -> JWTTokenIssuer:
    return JWTTokenIssuer(secret=TEST_JWT_SECRET, clock=clock)


@pytest.fixture
def directory(hasher: BcryptPasswordHasher):
    """Directory holding admin/password123 (id 1) and user/userpass (id 2)."""
    return seed_demo_directory(hasher)


@pytest.fixture
def service(directory, hasher, issuer, settings) -> AuthService:
    return AuthService(
        directory=directory,
        hasher=hasher,
        issuer=issuer,
        settings=settings,
    )
