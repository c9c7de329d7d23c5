"""Configuration management with Pydantic Settings.

Settings are loaded from:
1. Environment variables prefixed with ``CTXLOG_`` (highest priority)
2. .env file (development)
3. Defaults (lowest priority)

List and mapping settings are read from the environment as JSON, e.g.
``CTXLOG_UNREGISTER_FIELDS='["source_line"]'``.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    FATAL = "FATAL"
    PANIC = "PANIC"


class LogFormat(str, Enum):
    """Logging format for the structlog backend."""

    JSON = "json"
    TEXT = "text"


class BackendKind(str, Enum):
    """Backend installed by ``setup_logging``."""

    STD = "std"  # standard library logging, text lines
    STRUCTLOG = "structlog"


class CtxlogSettings(BaseSettings):
    """Logging settings.

    All settings can be overridden via environment variables,
    e.g. ``CTXLOG_LEVEL=DEBUG``.
    """

    model_config = SettingsConfigDict(
        env_prefix="CTXLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    level: LogLevel = Field(default=LogLevel.INFO, description="Backend threshold")
    backend: BackendKind = Field(default=BackendKind.STD, description="Backend to install")
    log_format: LogFormat = Field(
        default=LogFormat.JSON,
        description="Rendering of the structlog backend",
    )
    disable_timestamp: bool = Field(default=False, description="Omit timestamps")
    caller_frames_to_skip: int = Field(
        default=2,
        ge=0,
        description="Stack frames between the dispatcher and the call site",
    )

    # Field registry and suppression
    register_fields: list[str] = Field(
        default_factory=list,
        description="Extra fields to register",
    )
    unregister_fields: list[str] = Field(
        default_factory=list,
        description="Fields to remove from the registry",
    )
    # JSON scalars keep their type, e.g. CTXLOG_SKIP='{"source_line": 12}'
    skip: dict[str, str | int | float | bool] = Field(
        default_factory=dict,
        description="Suppression rules, field -> value",
    )


@lru_cache
def get_settings() -> CtxlogSettings:
    """Get cached settings instance.

    Uses LRU cache to avoid re-parsing environment variables.
    """
    return CtxlogSettings()
