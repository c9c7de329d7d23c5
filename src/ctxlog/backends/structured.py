"""structlog backend.

Fields are bound onto a structlog logger and the message becomes the
structlog ``event``. The renderer is chosen by :func:`build_structlog_logger`:

    {"asset": "a1", "component": "svc", "event": "this is info", "level": "info"}

or, for ``LogFormat.TEXT``, structlog's console renderer without colors.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

import structlog
from structlog.types import Processor

from ..backend import BackendFactory, PanicError, format_message
from ..config import LogFormat
from ..levels import Level

# structlog has no FATAL/PANIC methods.
_METHODS = {
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warning",
    Level.ERROR: "error",
    Level.FATAL: "critical",
    Level.PANIC: "critical",
}


def build_structlog_logger(
    log_format: LogFormat | str = LogFormat.JSON,
    *,
    stream: TextIO | None = None,
    disable_timestamp: bool = False,
) -> Any:
    """Build a self-contained structlog logger writing to ``stream``.

    The global structlog configuration is left untouched.

    Args:
        log_format: JSON or text rendering
        stream: Output stream (defaults to stdout)
        disable_timestamp: Omit the ISO 8601 ``timestamp`` key
    """
    processors: list[Processor] = [structlog.processors.add_log_level]
    if not disable_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if LogFormat(log_format) == LogFormat.JSON:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    return structlog.wrap_logger(
        structlog.PrintLogger(file=stream if stream is not None else sys.stdout),
        processors=processors,
        wrapper_class=structlog.BoundLogger,
        context_class=dict,
    )


class StructlogBackend:
    """Backend delegating output to a structlog logger."""

    def __init__(self, logger: Any = None, level: Level | str = Level.INFO):
        """Initialize the backend.

        Args:
            logger: structlog logger (defaults to a JSON logger on stdout)
            level: Threshold below which calls are dropped
        """
        self.logger = logger if logger is not None else build_structlog_logger()
        self.level = Level.parse(level)

    def new_entry(self) -> "StructlogEntry":
        return StructlogEntry(self)


class StructlogEntry:
    """Per-call entry of a :class:`StructlogBackend`."""

    def __init__(self, backend: StructlogBackend):
        self._backend = backend
        self._logger = backend.logger

    def get_level(self) -> Level:
        return self._backend.level

    def with_field(self, key: str, value: Any) -> "StructlogEntry":
        self._logger = self._logger.bind(**{key: value})
        return self

    def _write(self, level: Level, fmt: str, args: tuple[Any, ...]) -> str:
        message = format_message(fmt, args)
        getattr(self._logger, _METHODS[level])(message)
        return message

    def debug(self, fmt: str, *args: Any) -> None:
        self._write(Level.DEBUG, fmt, args)

    def info(self, fmt: str, *args: Any) -> None:
        self._write(Level.INFO, fmt, args)

    def warn(self, fmt: str, *args: Any) -> None:
        self._write(Level.WARN, fmt, args)

    def error(self, fmt: str, *args: Any) -> None:
        self._write(Level.ERROR, fmt, args)

    def fatal(self, fmt: str, *args: Any) -> None:
        self._write(Level.FATAL, fmt, args)
        sys.exit(1)

    def panic(self, fmt: str, *args: Any) -> None:
        raise PanicError(self._write(Level.PANIC, fmt, args))


def new_structlog_factory(logger: Any = None, level: Level | str = Level.INFO) -> BackendFactory:
    """Create a :class:`StructlogBackend` and return its entry factory."""
    return StructlogBackend(logger, level).new_entry
