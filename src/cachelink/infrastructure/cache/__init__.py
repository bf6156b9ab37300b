"""Cache Infrastructure - Redis client implementation."""

from .client_factory import create_cache_client
from .redis_client import RedisCacheClient

__all__ = [
    "RedisCacheClient",
    "create_cache_client",
]
