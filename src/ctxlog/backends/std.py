"""Text backend built on the standard library ``logging`` module.

Output format, one line per entry:

    2024-01-01T00:00:00+00:00 [INFO] [asset=a1][component=svc] message

The timestamp prefix is dropped with ``disable_timestamp=True`` and the
field group is omitted when the entry carries no field.
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

from ..backend import BackendFactory, PanicError, format_message
from ..levels import Level

_FIELDS_ATTR = "ctxlog_fields"
_LEVEL_ATTR = "ctxlog_level"


class FieldsFormatter(logging.Formatter):
    """Render a record as ``[LEVEL] [k=v]... message``."""

    def __init__(self, disable_timestamp: bool = False):
        super().__init__()
        self.disable_timestamp = disable_timestamp

    def format(self, record: logging.LogRecord) -> str:
        level = getattr(record, _LEVEL_ATTR, None)
        label = level.label if isinstance(level, Level) else record.levelname
        fields: list[tuple[str, Any]] = getattr(record, _FIELDS_ATTR, [])

        parts = [f"[{label}]"]
        if fields:
            parts.append("".join(f"[{key}={value}]" for key, value in fields))
        parts.append(record.getMessage())
        line = " ".join(parts)

        if self.disable_timestamp:
            return line
        timestamp = datetime.fromtimestamp(record.created, tz=UTC).isoformat()
        return f"{timestamp} {line}"


class StdBackend:
    """Backend writing text lines through a private stdlib logger."""

    def __init__(
        self,
        level: Level | str = Level.INFO,
        *,
        disable_timestamp: bool = False,
        stream: TextIO | None = None,
        name: str = "ctxlog",
    ):
        """Initialize the backend.

        Args:
            level: Threshold below which calls are dropped
            disable_timestamp: Omit the timestamp prefix
            stream: Output stream (defaults to stderr)
            name: Name of the underlying stdlib logger
        """
        self.level = Level.parse(level)

        # Not registered in the logging hierarchy: the host application's
        # logging configuration neither filters nor duplicates these lines.
        self._logger = logging.Logger(name, logging.DEBUG)
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.setFormatter(FieldsFormatter(disable_timestamp=disable_timestamp))
        self._logger.addHandler(handler)

    def new_entry(self) -> "StdEntry":
        return StdEntry(self)

    def write(self, level: Level, fields: list[tuple[str, Any]], message: str) -> None:
        self._logger.log(
            level.stdlib_level,
            message,
            extra={_FIELDS_ATTR: fields, _LEVEL_ATTR: level},
        )


class StdEntry:
    """Per-call entry of a :class:`StdBackend`."""

    def __init__(self, backend: StdBackend):
        self._backend = backend
        self.fields: list[tuple[str, Any]] = []

    def get_level(self) -> Level:
        return self._backend.level

    def with_field(self, key: str, value: Any) -> "StdEntry":
        self.fields.append((key, value))
        return self

    def _write(self, level: Level, fmt: str, args: tuple[Any, ...]) -> str:
        message = format_message(fmt, args)
        self._backend.write(level, self.fields, message)
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


def new_std_factory(
    level: Level | str = Level.INFO,
    *,
    disable_timestamp: bool = False,
    stream: TextIO | None = None,
) -> BackendFactory:
    """Create a :class:`StdBackend` and return its entry factory."""
    return StdBackend(level, disable_timestamp=disable_timestamp, stream=stream).new_entry
