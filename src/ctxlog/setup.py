"""Apply settings to a logger.

Features:
- Backend selection (std text lines or structlog JSON/console)
- Caller depth configuration
- Field registration and removal
- Suppression rules
"""

from __future__ import annotations

from typing import TextIO

from .backend import BackendFactory
from .backends.std import new_std_factory
from .backends.structured import build_structlog_logger, new_structlog_factory
from .config import BackendKind, CtxlogSettings, get_settings
from .diagnostics import get_logger
from .dispatch import Logger, get_default_logger
from .levels import Level

_log = get_logger(__name__)


def build_factory(settings: CtxlogSettings, stream: TextIO | None = None) -> BackendFactory:
    """Build the backend factory described by ``settings``."""
    level = Level.parse(settings.level.value)

    if settings.backend == BackendKind.STRUCTLOG:
        structlog_logger = build_structlog_logger(
            settings.log_format,
            stream=stream,
            disable_timestamp=settings.disable_timestamp,
        )
        return new_structlog_factory(structlog_logger, level)

    return new_std_factory(
        level,
        disable_timestamp=settings.disable_timestamp,
        stream=stream,
    )


def setup_logging(
    settings: CtxlogSettings | None = None,
    *,
    logger: Logger | None = None,
    stream: TextIO | None = None,
) -> Logger:
    """Configure a logger from settings.

    Args:
        settings: Settings to apply (defaults to get_settings())
        logger: Logger to configure (defaults to the process-wide logger)
        stream: Output stream override for the backend

    Returns:
        The configured logger
    """
    settings = settings or get_settings()
    target = logger or get_default_logger()

    target.factory = build_factory(settings, stream)
    target.caller_frames_to_skip = settings.caller_frames_to_skip

    if settings.register_fields:
        target.register_field(*settings.register_fields)
    if settings.unregister_fields:
        target.unregister_field(*settings.unregister_fields)
    for field, value in settings.skip.items():
        target.skip(field, value)

    _log.info(
        "Logging configured",
        backend=settings.backend.value,
        level=settings.level.value,
        fields=[str(f) for f in target.fields],
        skip_rules=sorted(settings.skip),
    )
    return target
