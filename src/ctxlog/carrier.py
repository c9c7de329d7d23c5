"""Value carrier: immutable, chainable key/value association.

A :class:`Carrier` is how metadata reaches the dispatcher. Each
``with_value`` call returns a new carrier that shadows its parent; the
parent is never modified, so a carrier can be shared freely between
threads and tasks.

The carrier has no cancellation or deadline semantics. It is a lookup
surface only.

A carrier can also be bound to the running context (thread or asyncio
task) so that call sites may pass ``None`` instead of threading it through
every function:

    with bind_carrier(Carrier.of({"component": "billing"})):
        ctxlog.info(None, "charging card")  # includes component=billing
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

_MISSING = object()


class Carrier:
    """Immutable linked chain of key/value bindings; innermost wins."""

    __slots__ = ("_parent", "_key", "_value")

    def __init__(self) -> None:
        self._parent: Carrier | None = None
        self._key: Any = _MISSING
        self._value: Any = None

    @classmethod
    def of(cls, values: Mapping[str, Any] | None = None, **kwargs: Any) -> Carrier:
        """Build a carrier from a mapping and/or keyword values."""
        return EMPTY.with_values(values, **kwargs)

    def with_value(self, key: str, value: Any) -> Carrier:
        """Return a new carrier binding ``key`` to ``value`` on top of this one."""
        child = Carrier()
        child._parent = self
        child._key = key
        child._value = value
        return child

    def with_values(self, values: Mapping[str, Any] | None = None, **kwargs: Any) -> Carrier:
        """Return a new carrier with every pair of ``values`` and ``kwargs`` bound."""
        carrier = self
        for source in (values or {}, kwargs):
            for key, value in source.items():
                carrier = carrier.with_value(key, value)
        return carrier

    def value(self, key: str, default: Any = None) -> Any:
        """Return the innermost value bound to ``key``, or ``default``."""
        node: Carrier | None = self
        while node is not None:
            if node._key is not _MISSING and node._key == key:
                return node._value
            node = node._parent
        return default

    def as_dict(self) -> dict[str, Any]:
        """Flatten the chain into a dict, innermost binding winning."""
        result: dict[str, Any] = {}
        for key, value in self._bindings():
            result.setdefault(key, value)
        return result

    def _bindings(self) -> Iterator[tuple[Any, Any]]:
        node: Carrier | None = self
        while node is not None:
            if node._key is not _MISSING:
                yield node._key, node._value
            node = node._parent

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self._bindings())

    def __bool__(self) -> bool:
        return self._key is not _MISSING or (
            self._parent is not None and bool(self._parent)
        )

    def __repr__(self) -> str:
        return f"Carrier({self.as_dict()!r})"


EMPTY = Carrier()

_CURRENT: ContextVar[Carrier] = ContextVar("ctxlog_carrier", default=EMPTY)


def current_carrier() -> Carrier:
    """Return the carrier bound to the running context."""
    return _CURRENT.get()


@contextmanager
def bind_carrier(carrier: Carrier) -> Iterator[Carrier]:
    """Bind ``carrier`` to the running context for the duration of a block."""
    token = _CURRENT.set(carrier)
    try:
        yield carrier
    finally:
        _CURRENT.reset(token)


@contextmanager
def bind_values(**values: Any) -> Iterator[Carrier]:
    """Extend the current carrier with ``values`` for the duration of a block."""
    with bind_carrier(current_carrier().with_values(values)) as carrier:
        yield carrier


def as_carrier(value: Carrier | Mapping[str, Any] | None) -> Carrier:
    """Coerce what a call site passed into a carrier.

    ``None`` selects the carrier bound to the running context.
    """
    if value is None:
        return current_carrier()
    if isinstance(value, Carrier):
        return value
    return Carrier.of(value)
