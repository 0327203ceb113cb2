"""Shared test fixtures for async database, sessions, Redis, and settings."""

import fnmatch
import time
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from eligibility_api.core.config import Settings
from eligibility_api.models.base import Base


class InMemoryRedis:
    """Async stand-in for the subset of redis.asyncio.Redis the caches use."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.expiry: dict[str, float] = {}

    def _purge(self, key: str) -> None:
        deadline = self.expiry.get(key)
        if deadline is not None and deadline <= time.monotonic():
            self.store.pop(key, None)
            self.expiry.pop(key, None)

    async def get(self, key: str) -> str | None:
        self._purge(key)
        return self.store.get(key)

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self.store[key] = value
        if ex is not None:
            self.expiry[key] = time.monotonic() + ex
        else:
            self.expiry.pop(key, None)
        return True

    async def delete(self, *keys: str) -> int:
        deleted = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                deleted += 1
            self.expiry.pop(key, None)
        return deleted

    async def keys(self, pattern: str = "*") -> list[str]:
        for key in list(self.store):
            self._purge(key)
        return [k for k in self.store if fnmatch.fnmatchcase(k, pattern)]

    async def exists(self, *keys: str) -> int:
        for key in keys:
            self._purge(key)
        return sum(1 for k in keys if k in self.store)

    async def ttl(self, key: str) -> int:
        self._purge(key)
        if key not in self.store:
            return -2
        deadline = self.expiry.get(key)
        if deadline is None:
            return -1
        return int(deadline - time.monotonic())

    async def expire(self, key: str, seconds: int) -> bool:
        self._purge(key)
        if key not in self.store:
            return False
        self.expiry[key] = time.monotonic() + seconds
        return True

    async def dbsize(self) -> int:
        return len(self.store)

    async def ping(self) -> bool:
        return True


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        _env_file=None,  # type: ignore[call-arg]
    )


@pytest.fixture
def fake_redis() -> InMemoryRedis:
    """In-memory Redis replacement with TTL support."""
    return InMemoryRedis()


@pytest.fixture
async def async_engine(settings: Settings) -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory async SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def async_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create a per-test async session."""
    session_factory = async_sessionmaker(async_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
