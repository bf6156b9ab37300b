"""Cache Port - Interface for a remote key-value cache with TTL support."""

from __future__ import annotations

from typing import Protocol


class CachePort(Protocol):
    """Port for a remote string cache.

    Implementations:
      - RedisCacheClient (redis.asyncio, single connection)

    Reads are awaited; writes are fire-and-forget and must be issued from
    inside a running event loop:
        async with cache:
            cache.set("key", "value", 60)
            value = await cache.get("key")
    """

    def is_alive(self) -> bool:
        """True if the last transport signal was a successful connect."""
        ...

    async def get(self, key: str) -> str | None:
        """Retrieve value. None = not found / expired."""
        ...

    def set(self, key: str, value: str, duration: int) -> None:
        """Store value with TTL (seconds). Outcome is not reported."""
        ...

    def delete(self, key: str) -> None:
        """Remove key if present. Outcome is not reported."""
        ...

    async def connect(self) -> bool:
        """Probe the service once; returns the resulting alive state."""
        ...

    async def aclose(self) -> None:
        """Cleanup hook (drain pending writes, close connection)."""
        ...

    async def __aenter__(self) -> CachePort: ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None: ...
