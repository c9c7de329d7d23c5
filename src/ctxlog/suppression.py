"""Suppression rules.

A rule maps a field to one value. At dispatch time, a log entry whose carrier
holds exactly that value for that field is dropped as a whole.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .diagnostics import get_logger
from .fields import Field

logger = get_logger(__name__)

_NO_RULE = object()


class SkipRules:
    """Field -> suppressed value mapping, last write wins per field.

    Published as a read-only mapping replaced on every write, so the
    dispatcher can read it without locking.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._rules: Mapping[Field, Any] = MappingProxyType({})

    def skip(self, field: str, value: Any) -> None:
        """Set or replace the suppressed value for ``field``."""
        with self._lock:
            rules = dict(self._rules)
            rules[Field(field)] = value
            self._rules = MappingProxyType(rules)

        logger.debug("Skip rule installed", field=str(field), value=repr(value))

    def matches(self, field: str, value: Any) -> bool:
        """Return True if ``value`` is the suppressed value for ``field``.

        Both type and value must be equal: a rule for ``1`` matches neither
        ``True`` nor ``1.0``.
        """
        suppressed = self._rules.get(field, _NO_RULE)
        if suppressed is _NO_RULE:
            return False
        return type(suppressed) is type(value) and bool(suppressed == value)

    def snapshot(self) -> Mapping[Field, Any]:
        """Return the currently published rules."""
        return self._rules

    def __contains__(self, field: object) -> bool:
        return field in self._rules

    def __len__(self) -> int:
        return len(self._rules)
