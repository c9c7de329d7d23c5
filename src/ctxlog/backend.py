"""Backend contract.

A backend factory produces one :class:`BackendEntry` per log call. The
entry reports the backend's threshold, accumulates fields and performs the
formatted write. FATAL output must terminate the process after writing and
PANIC output must raise :class:`PanicError` after writing; the dispatcher
relies on the backend for both.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from .diagnostics import get_logger
from .levels import Level

logger = get_logger(__name__)


class PanicError(Exception):
    """Raised by a backend after writing a PANIC-level entry."""

    pass


class BackendEntry(Protocol):
    """One in-flight log entry owned by a backend."""

    def get_level(self) -> Level: ...

    def with_field(self, key: str, value: Any) -> "BackendEntry": ...

    def debug(self, fmt: str, *args: Any) -> None: ...

    def info(self, fmt: str, *args: Any) -> None: ...

    def warn(self, fmt: str, *args: Any) -> None: ...

    def error(self, fmt: str, *args: Any) -> None: ...

    def fatal(self, fmt: str, *args: Any) -> None: ...

    def panic(self, fmt: str, *args: Any) -> None: ...


BackendFactory = Callable[[], BackendEntry]


def format_message(fmt: str, args: tuple[Any, ...]) -> str:
    """Apply printf-style substitution; a template without args is used verbatim.

    A template that does not fit its arguments never raises: the template is
    kept as is and the arguments are appended, so the entry is still written.
    """
    if not args:
        return fmt
    try:
        return fmt % args
    except (TypeError, ValueError, KeyError) as e:
        logger.debug("Message formatting failed", template=fmt, error=str(e))
        return f"{fmt} {args!r}"
