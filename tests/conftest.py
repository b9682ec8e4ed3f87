"""Pytest configuration for all tests."""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from classalarm.core.config import Settings, get_settings
from classalarm.infrastructure.persistence.database import DatabaseManager

TEST_SECRET_KEY = "test-secret-key-with-at-least-32-bytes!"


class FakeClock:
    """Controllable replacement for ``utc_now``."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 9, 2, 8, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are cached per process; start each test from a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        environment="testing",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'classalarm.db'}",
        secret_key=TEST_SECRET_KEY,
        device_secret_salt="test-salt",
        push_provider="log",
    )


@pytest_asyncio.fixture
async def db(test_settings: Settings) -> AsyncGenerator[DatabaseManager, None]:
    """Database manager with the current-schema tables created."""
    manager = DatabaseManager(test_settings)
    await manager.create_tables()
    yield manager
    await manager.drop_tables()
    await manager.disconnect()
