"""Severity levels.

Levels are totally ordered, ascending:
DEBUG < INFO < WARN < ERROR < FATAL < PANIC.
"""

import logging
from enum import IntEnum


class Level(IntEnum):
    """Log severity."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4
    PANIC = 5

    @property
    def method_name(self) -> str:
        """Name of the backend entry method emitting at this level."""
        return self.name.lower()

    @property
    def label(self) -> str:
        return self.name

    @property
    def stdlib_level(self) -> int:
        """Equivalent numeric level of the standard library ``logging`` module."""
        return _STDLIB_LEVELS[self]

    @classmethod
    def parse(cls, value: "str | int | Level") -> "Level":
        """Parse a level from a name, a member, or its integer value.

        Names are case-insensitive. ``warning`` and ``critical`` are accepted
        as aliases of WARN and FATAL.

        Raises:
            ValueError: Unknown level
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        key = str(value).strip().upper()
        key = _ALIASES.get(key, key)
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown log level: {value!r}") from None


_ALIASES = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
}

_STDLIB_LEVELS = {
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARN: logging.WARNING,
    Level.ERROR: logging.ERROR,
    Level.FATAL: logging.CRITICAL,
    Level.PANIC: logging.CRITICAL,
}
