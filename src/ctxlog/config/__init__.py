"""Configuration management module.

This module provides:
- Environment-based configuration with validation
- Cached settings access via get_settings()
"""

from .settings import BackendKind, CtxlogSettings, LogFormat, LogLevel, get_settings

__all__ = [
    # Main settings
    "CtxlogSettings",
    "get_settings",
    # Enums
    "LogLevel",
    "LogFormat",
    "BackendKind",
]
