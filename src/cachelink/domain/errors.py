"""Cache client exceptions."""

from __future__ import annotations


class CacheError(Exception):
    """Base class for all cache client errors."""


class CacheConnectionError(CacheError, ConnectionError):
    """Raised when the cache service cannot be reached."""


class CacheCommandError(CacheError):
    """Raised when the cache service rejects a command."""
