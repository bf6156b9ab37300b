"""Process-wide cache client.

The first call to `get_cache_client()` loads the configuration and builds
the client; every later call returns the same instance.
"""

from __future__ import annotations

import threading
from typing import Optional

import structlog

from cachelink.infrastructure.cache.client_factory import create_cache_client
from cachelink.infrastructure.cache.redis_client import RedisCacheClient
from cachelink.infrastructure.config import AppConfig, load_config

log = structlog.get_logger(__name__)

_CLIENT: Optional[RedisCacheClient] = None
_CLIENT_LOCK = threading.Lock()


def get_cache_client(config: AppConfig | None = None) -> RedisCacheClient:
    """Return the shared client, creating it on first use.

    `config` only matters for the call that creates the client; without it
    the configuration is loaded from defaults and CACHELINK_* env vars.
    """
    global _CLIENT
    if _CLIENT is None:
        with _CLIENT_LOCK:
            if _CLIENT is None:
                _CLIENT = create_cache_client(
                    config if config is not None else load_config()
                )
    elif config is not None:
        log.debug("cache_client_config_ignored", reason="already_initialized")
    return _CLIENT


def reset_cache_client() -> Optional[RedisCacheClient]:
    """Forget the shared client and return it (caller closes it)."""
    global _CLIENT
    with _CLIENT_LOCK:
        client, _CLIENT = _CLIENT, None
    return client
