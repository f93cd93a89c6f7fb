"""Root conftest — shared test configuration and clock/token fixtures."""

import os
from datetime import datetime, timedelta, timezone

import pytest

# Ensure tests never need real secrets or a real database
os.environ.setdefault("JWT_SECRET", "test-signing-secret-0123456789abcdef")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)

from app.infrastructure.password_hasher import PasswordHasher  # noqa: E402
from app.infrastructure.token_service import TokenService  # noqa: E402

TEST_SECRET = os.environ["JWT_SECRET"]


class FakeClock:
    """Controllable clock: call it for "now", advance() to move time forward."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock(datetime.now(timezone.utc).replace(microsecond=0))


@pytest.fixture
def token_service(clock):
    return TokenService(TEST_SECRET, ttl_seconds=3600, clock=clock)


@pytest.fixture
def hasher():
    """Minimum bcrypt cost keeps the suite fast."""
    return PasswordHasher(rounds=4)
