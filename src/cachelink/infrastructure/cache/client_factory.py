"""Cache client factory - builds the Redis client from validated config."""

from __future__ import annotations

import structlog

from cachelink.infrastructure.cache.redis_client import RedisCacheClient, redact_url
from cachelink.infrastructure.config.schema import AppConfig

log = structlog.get_logger(__name__)


def create_cache_client(config: AppConfig) -> RedisCacheClient:
    """Create a RedisCacheClient wired to `config.redis_*`.

    No network I/O happens here; call `connect()` (or `async with`) to
    probe the service.
    """
    log.info(
        "cache_client_create",
        url=redact_url(config.redis_url),
        client_name=config.redis_client_name,
    )
    return RedisCacheClient(
        config.redis_url,
        socket_connect_timeout=config.redis_socket_connect_timeout,
        socket_timeout=config.redis_socket_timeout,
        client_name=config.redis_client_name,
    )
