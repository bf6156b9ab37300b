"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]

_REDIS_SCHEMES = ("redis://", "rediss://", "unix://")


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (redis/logging).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="cachelink", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # Redis transport (YAML section: redis.*)
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        validation_alias=AliasChoices(
            "redis_url",
            AliasPath("redis", "url"),
        ),
        description="Redis connection URL (host, port, db, credentials).",
    )
    redis_socket_connect_timeout: float = Field(
        default=5.0,
        validation_alias=AliasChoices(
            "redis_socket_connect_timeout",
            AliasPath("redis", "socket_connect_timeout"),
        ),
        description="Seconds to wait for the TCP handshake.",
    )
    redis_socket_timeout: Optional[float] = Field(
        default=5.0,
        validation_alias=AliasChoices(
            "redis_socket_timeout",
            AliasPath("redis", "socket_timeout"),
        ),
        description="Seconds to wait for a reply. None = no limit.",
    )
    redis_client_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "redis_client_name",
            AliasPath("redis", "client_name"),
        ),
        description="Connection name reported via CLIENT SETNAME.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    @field_validator("redis_url")
    @classmethod
    def _validate_redis_url(cls, v: str) -> str:
        if not v.startswith(_REDIS_SCHEMES):
            raise ValueError(
                f"redis_url must start with one of {', '.join(_REDIS_SCHEMES)}"
            )
        return v

    @field_validator("redis_socket_connect_timeout")
    @classmethod
    def _validate_connect_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("redis_socket_connect_timeout must be > 0")
        return v

    @field_validator("redis_socket_timeout")
    @classmethod
    def _validate_socket_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("redis_socket_timeout must be > 0 or null")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "redis": {
                "url": self.redis_url,
                "socket_connect_timeout": self.redis_socket_connect_timeout,
                "socket_timeout": self.redis_socket_timeout,
                "client_name": self.redis_client_name,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    load.py creates EnvOverrides() to read CACHELINK_* variables, converts
    them to a dict of set values and merges that over YAML/defaults before
    AppConfig validation.

    Supported env var examples (flat, explicit):
    - CACHELINK_REDIS_URL
    - CACHELINK_REDIS_SOCKET_TIMEOUT
    - CACHELINK_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="CACHELINK_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    redis_url: Optional[str] = None
    redis_socket_connect_timeout: Optional[float] = None
    redis_socket_timeout: Optional[float] = None
    redis_client_name: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
