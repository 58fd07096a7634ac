"""Root test fixtures shared across all test types.

Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import Callable
from datetime import datetime, timedelta

import pytest

from src.pnrelease.core.config import get_settings
from src.pnrelease.workflow import ReleaseEngine

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


class FakeClock:
    """Deterministic clock advancing one minute per call."""

    def __init__(self, start: datetime = datetime(2026, 1, 5, 9, 0)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(minutes=1)
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def release_engine(clock: Callable[[], datetime]) -> ReleaseEngine:
    return ReleaseEngine(clock=clock)
