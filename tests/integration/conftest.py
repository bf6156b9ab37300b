"""Shared fixtures for integration tests.

Live tests talk to a real Redis on localhost:6379, database 15, which is
flushed before and after every test. They are skipped when Redis is down.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest

from cachelink.infrastructure.cache.redis_client import RedisCacheClient

LIVE_REDIS_URL = "redis://localhost:6379/15"


@pytest.fixture()
async def live_client() -> AsyncIterator[RedisCacheClient]:
    """Connected RedisCacheClient on the flushed test database."""
    client = RedisCacheClient(LIVE_REDIS_URL, socket_timeout=2.0)
    async with client:
        await client._redis.flushdb()  # noqa: SLF001
        yield client
        await client.drain()
        await client._redis.flushdb()  # noqa: SLF001
