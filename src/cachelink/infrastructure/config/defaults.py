"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "cachelink",
    "environment": "dev",
    "redis": {
        "url": "redis://localhost:6379/0",
        "socket_connect_timeout": 5.0,
        "socket_timeout": 5.0,
        "client_name": None,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
