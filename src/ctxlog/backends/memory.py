"""In-memory backend recording entries, for tests."""

from __future__ import annotations

import sys
from typing import Any, NamedTuple

from ..backend import BackendFactory, PanicError, format_message
from ..levels import Level


class LogRecord(NamedTuple):
    """One recorded entry; ``fields`` keeps attachment order."""

    level: Level
    message: str
    fields: dict[str, Any]


class MemoryBackend:
    """Backend appending every emitted entry to :attr:`records`."""

    def __init__(self, level: Level | str = Level.DEBUG):
        self.level = Level.parse(level)
        self.records: list[LogRecord] = []

    def new_entry(self) -> "MemoryEntry":
        return MemoryEntry(self)

    @property
    def factory(self) -> BackendFactory:
        return self.new_entry

    def messages(self) -> list[str]:
        return [record.message for record in self.records]

    def clear(self) -> None:
        self.records.clear()


class MemoryEntry:
    """Per-call entry of a :class:`MemoryBackend`."""

    def __init__(self, backend: MemoryBackend):
        self._backend = backend
        self._fields: dict[str, Any] = {}

    def get_level(self) -> Level:
        return self._backend.level

    def with_field(self, key: str, value: Any) -> "MemoryEntry":
        self._fields[key] = value
        return self

    def _write(self, level: Level, fmt: str, args: tuple[Any, ...]) -> str:
        message = format_message(fmt, args)
        self._backend.records.append(LogRecord(level, message, dict(self._fields)))
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
