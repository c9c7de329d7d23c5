"""Recognized metadata keys and the registry holding them.

A :class:`Field` names one piece of metadata that a log entry may carry.
Only registered fields are read from a carrier at dispatch time.

Concurrency:
    Mutations take the registry lock, build a new sorted tuple and publish it
    with a single reference assignment. Readers never take the lock; they
    iterate whichever complete snapshot was published last. A registration
    racing with a dispatch becomes visible to the next dispatch.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator

from .diagnostics import get_logger

logger = get_logger(__name__)


class Field(str):
    """Opaque, string-backed metadata key.

    Equality and hashing follow the underlying string, so ``Field("asset")``
    and ``"asset"`` address the same carrier slot.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Field({str.__repr__(self)})"


FIELD_SOURCE_FILE = Field("source_file")
FIELD_SOURCE_LINE = Field("source_line")
FIELD_CALLER = Field("caller")
FIELD_STACK_TRACE = Field("stack_trace")

BUILTIN_FIELDS: tuple[Field, ...] = (
    FIELD_SOURCE_FILE,
    FIELD_SOURCE_LINE,
    FIELD_CALLER,
    FIELD_STACK_TRACE,
)


class FieldRegistry:
    """Ordered set of recognized fields, kept sorted by token value."""

    def __init__(self, fields: Iterable[str] = ()):
        self._lock = threading.Lock()
        self._fields: tuple[Field, ...] = ()
        if fields:
            self.register(*fields)

    def register(self, *fields: str) -> None:
        """Add each field not already present, then re-sort."""
        with self._lock:
            current = set(self._fields)
            added = [Field(f) for f in dict.fromkeys(fields) if f not in current]
            if not added:
                return
            self._fields = tuple(sorted(current.union(added)))

        logger.debug("Fields registered", fields=[str(f) for f in added])

    def unregister(self, *fields: str) -> None:
        """Remove the named fields; absent names are ignored."""
        requested = set(fields)
        with self._lock:
            removed = [f for f in self._fields if f in requested]
            if not removed:
                return
            self._fields = tuple(f for f in self._fields if f not in requested)

        logger.debug("Fields unregistered", fields=[str(f) for f in removed])

    def snapshot(self) -> tuple[Field, ...]:
        """Return the currently published, sorted fields."""
        return self._fields

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    def __contains__(self, field: object) -> bool:
        return field in self._fields

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"FieldRegistry({list(self._fields)!r})"
