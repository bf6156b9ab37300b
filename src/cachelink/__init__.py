"""cachelink - a thin asyncio client for a remote Redis cache."""

from cachelink.client import get_cache_client, reset_cache_client
from cachelink.domain.errors import CacheCommandError, CacheConnectionError, CacheError
from cachelink.domain.ports import CachePort
from cachelink.infrastructure.cache import RedisCacheClient

__all__ = [
    "CacheCommandError",
    "CacheConnectionError",
    "CacheError",
    "CachePort",
    "RedisCacheClient",
    "get_cache_client",
    "reset_cache_client",
]

__version__ = "0.1.0"
