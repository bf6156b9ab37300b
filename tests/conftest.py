"""Shared test fixtures for cachelink test suite."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from unittest.mock import AsyncMock

import pytest

from cachelink.client import reset_cache_client
from cachelink.infrastructure.cache.redis_client import RedisCacheClient

# ---------------------------------------------------------------------------
# Transport fakes
# ---------------------------------------------------------------------------


@dataclass
class FakeRedis:
    """Dict-backed stand-in for redis.asyncio.Redis (GET/SETEX/DEL/PING only).

    TTLs are recorded but not enforced.
    """

    data: dict[str, str] = field(default_factory=dict)
    ttls: dict[str, int] = field(default_factory=dict)
    closed: bool = False

    async def ping(self) -> bool:
        return True

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        self.data[key] = value
        self.ttls[key] = ttl
        return True

    async def delete(self, key: str) -> int:
        self.ttls.pop(key, None)
        return 1 if self.data.pop(key, None) is not None else 0

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture()
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture()
def mock_redis() -> AsyncMock:
    """Mock redis.asyncio.Redis transport."""
    redis = AsyncMock()
    redis.ping = AsyncMock(return_value=True)
    redis.get = AsyncMock(return_value=None)
    redis.setex = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    redis.aclose = AsyncMock()
    return redis


@pytest.fixture()
def client(mock_redis: AsyncMock) -> RedisCacheClient:
    """RedisCacheClient on the mocked transport (not yet connected)."""
    return RedisCacheClient(redis=mock_redis)


@pytest.fixture()
def fake_client(fake_redis: FakeRedis) -> RedisCacheClient:
    """RedisCacheClient on the dict-backed transport."""
    return RedisCacheClient(redis=fake_redis)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Process-wide state
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_shared_client() -> Iterator[None]:
    reset_cache_client()
    yield
    reset_cache_client()


@pytest.fixture(autouse=True)
def _clear_cachelink_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CACHELINK_* from the developer shell out of config tests."""
    for name in list(os.environ):
        if name.upper().startswith("CACHELINK_"):
            monkeypatch.delenv(name, raising=False)
