"""Redis cache client - async Redis via redis.asyncio on a single connection."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any
from urllib.parse import urlsplit, urlunsplit

import structlog
from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from cachelink.domain.errors import CacheCommandError, CacheConnectionError

log = structlog.get_logger(__name__)

_TRANSPORT_ERRORS = (RedisConnectionError, RedisTimeoutError)


def redact_url(url: str) -> str:
    """Mask the password part of a Redis URL for logging."""
    parts = urlsplit(url)
    if parts.password is None:
        return url
    netloc = parts.netloc.rsplit("@", 1)[1]
    user = parts.username or ""
    return urlunsplit(parts._replace(netloc=f"{user}:***@{netloc}"))


class RedisCacheClient:
    """Process-wide handle to a remote Redis cache.

    - Exactly one connection (`single_connection_client=True`), reused for
      every command; redis-py re-dials it on the next command after a drop.
    - `is_alive()` reflects the last transport signal: a successful exchange
      sets it, a connection/timeout failure clears it.
    - `get()` is awaited and fails loudly; `set()`/`delete()` are
      fire-and-forget: they schedule the command on the running loop and
      never report its outcome to the caller (failures are only logged).

    Args:
        url: Redis URL (e.g. `redis://localhost:6379/0`).
        redis: Pre-built transport (tests/DI). Not closed by `aclose()`.
        socket_connect_timeout: Seconds to wait for the TCP handshake.
        socket_timeout: Seconds to wait for a reply (None = no limit).
        client_name: Optional `CLIENT SETNAME` value.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        *,
        redis: Redis | None = None,
        socket_connect_timeout: float = 5.0,
        socket_timeout: float | None = 5.0,
        client_name: str | None = None,
    ) -> None:
        self.url = url
        self._safe_url = redact_url(url)
        self._owns_transport = redis is None
        if redis is None:
            # Lazy: no network I/O happens until the first command.
            redis = Redis.from_url(
                url,
                decode_responses=True,
                single_connection_client=True,
                socket_connect_timeout=socket_connect_timeout,
                socket_timeout=socket_timeout,
                client_name=client_name,
            )
        self._redis = redis
        self._alive = False
        self._pending: set[asyncio.Task[None]] = set()

        log.info(
            "redis_client_init",
            url=self._safe_url,
            socket_connect_timeout=socket_connect_timeout,
            socket_timeout=socket_timeout,
        )

    # --- Transport signals ---
    def _on_connect(self) -> None:
        if not self._alive:
            log.info("redis_connected", url=self._safe_url)
        self._alive = True

    def _on_error(self, error: BaseException) -> None:
        self._alive = False
        log.error(
            "redis_connection_error",
            url=self._safe_url,
            error=str(error),
        )

    # --- Context Manager ---
    async def __aenter__(self) -> RedisCacheClient:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def connect(self) -> bool:
        """PING once and fire the matching signal. Never raises."""
        try:
            await self._redis.ping()
        except RedisError as e:
            self._on_error(e)
        else:
            self._on_connect()
        return self._alive

    async def drain(self) -> None:
        """Wait until every fire-and-forget write issued so far has finished."""
        while self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def aclose(self) -> None:
        """Cleanup: flush pending writes, then close the connection."""
        await self.drain()
        if self._owns_transport:
            await self._redis.aclose()
        self._alive = False
        log.info("redis_closed", url=self._safe_url)

    # --- CachePort implementation ---
    def is_alive(self) -> bool:
        return self._alive

    async def get(self, key: str) -> str | None:
        """GET key. None = missing or expired.

        Raises:
            CacheConnectionError: Service not reachable.
            CacheCommandError: Service rejected the command.
        """
        # Writes issued before this call get to the connection first.
        await asyncio.sleep(0)
        try:
            value = await self._redis.get(key)
        except _TRANSPORT_ERRORS as e:
            self._on_error(e)
            raise CacheConnectionError(
                f"Redis not reachable at {self._safe_url}: {e}"
            ) from e
        except RedisError as e:
            log.error("redis_get_error", key=key, error=str(e))
            raise CacheCommandError(f"GET {key!r} failed: {e}") from e

        self._on_connect()
        if value is None:
            log.debug("cache_miss", key=key)
            return None
        log.debug("cache_hit", key=key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str, duration: int) -> None:
        """SETEX key duration value, fire-and-forget."""
        self._dispatch(
            "set",
            key,
            lambda: self._redis.setex(key, duration, value),
            ttl=duration,
        )

    def delete(self, key: str) -> None:
        """DEL key, fire-and-forget."""
        self._dispatch("delete", key, lambda: self._redis.delete(key))

    # --- Fire-and-forget plumbing ---
    def _dispatch(
        self,
        op: str,
        key: str,
        command: Callable[[], Awaitable[Any]],
        **context: Any,
    ) -> None:
        # Raises RuntimeError outside a running loop, before any I/O is built.
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._run_write(op, key, command, context))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _run_write(
        self,
        op: str,
        key: str,
        command: Callable[[], Awaitable[Any]],
        context: dict[str, Any],
    ) -> None:
        try:
            await command()
        except _TRANSPORT_ERRORS as e:
            self._on_error(e)
            log.warning("cache_write_dropped", op=op, key=key, **context)
        except RedisError as e:
            log.error("cache_write_failed", op=op, key=key, error=str(e), **context)
        else:
            self._on_connect()
            log.debug("cache_write", op=op, key=key, **context)
