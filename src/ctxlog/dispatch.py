"""Leveled dispatch.

A :class:`Logger` ties together the field registry, the skip rules, caller
resolution and the backend factory. For each call it:

1. builds a backend entry and returns early when the level is below the
   backend threshold;
2. extends the carrier with the caller's file, line and function;
3. reads every registered field from the carrier, in sorted order,
   dropping the whole entry if a value matches a skip rule;
4. attaches the surviving fields and emits at the requested level.

Module-level functions act on a process-wide default logger:

    import ctxlog

    COMPONENT = ctxlog.Field("component")
    ctxlog.register_field(COMPONENT)

    carrier = ctxlog.Carrier.of({COMPONENT: "billing"})
    ctxlog.info(carrier, "charged %d cents", 1250)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .backend import BackendEntry, BackendFactory
from .backends.std import new_std_factory
from .caller import resolve_caller, with_caller
from .carrier import Carrier, as_carrier
from .diagnostics import get_logger
from .fields import BUILTIN_FIELDS, Field, FieldRegistry
from .levels import Level
from .suppression import SkipRules
from .stacktrace import with_stack_trace

logger = get_logger(__name__)

# Logger._call and the public method that invoked it.
DEFAULT_CALLER_FRAMES_TO_SKIP = 2

CarrierLike = Carrier | Mapping[str, Any] | None


class Logger:
    """Dispatcher and the shared configuration it reads on every call.

    Registry and skip rule mutations are synchronized; dispatch reads their
    published snapshots without locking (see :mod:`ctxlog.fields`). The
    factory slot is a plain attribute, meant to be set during setup.
    """

    def __init__(
        self,
        factory: BackendFactory | None = None,
        *,
        caller_frames_to_skip: int = DEFAULT_CALLER_FRAMES_TO_SKIP,
    ):
        """Initialize the logger.

        Args:
            factory: Backend entry factory (defaults to stderr text at INFO)
            caller_frames_to_skip: Frames between the dispatcher and the call site
        """
        self._factory: BackendFactory = factory if factory is not None else new_std_factory()
        self._caller_frames_to_skip = 0
        self.caller_frames_to_skip = caller_frames_to_skip
        self.fields = FieldRegistry(BUILTIN_FIELDS)
        self.skip_rules = SkipRules()

    @property
    def factory(self) -> BackendFactory:
        return self._factory

    @factory.setter
    def factory(self, factory: BackendFactory) -> None:
        self._factory = factory
        logger.debug("Backend factory replaced", factory=repr(factory))

    @property
    def caller_frames_to_skip(self) -> int:
        return self._caller_frames_to_skip

    @caller_frames_to_skip.setter
    def caller_frames_to_skip(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"caller_frames_to_skip must be >= 0, got {value}")
        self._caller_frames_to_skip = value

    def register_field(self, *fields: str) -> None:
        self.fields.register(*fields)

    def unregister_field(self, *fields: str) -> None:
        self.fields.unregister(*fields)

    def skip(self, field: str, value: Any) -> None:
        """Drop every entry whose carrier maps ``field`` to ``value``."""
        self.skip_rules.skip(field, value)

    def field_values(self, carrier: CarrierLike = None) -> dict[Field, Any]:
        """Return the registered fields present in ``carrier``, in registry order.

        Neither caller resolution nor skip rules are applied.
        """
        carrier = as_carrier(carrier)
        values: dict[Field, Any] = {}
        for field in self.fields.snapshot():
            value = carrier.value(field)
            if value is not None:
                values[field] = value
        return values

    # Every emitting method calls _call directly, so the caller is always
    # caller_frames_to_skip frames above _call.

    def debug(self, carrier: CarrierLike, fmt: str, *args: Any) -> None:
        self._call(carrier, Level.DEBUG, fmt, args)

    def info(self, carrier: CarrierLike, fmt: str, *args: Any) -> None:
        self._call(carrier, Level.INFO, fmt, args)

    def warn(self, carrier: CarrierLike, fmt: str, *args: Any) -> None:
        self._call(carrier, Level.WARN, fmt, args)

    warning = warn

    def error(self, carrier: CarrierLike, fmt: str, *args: Any) -> None:
        self._call(carrier, Level.ERROR, fmt, args)

    def fatal(self, carrier: CarrierLike, fmt: str, *args: Any) -> None:
        """Log at FATAL; the backend terminates the process after writing."""
        self._call(carrier, Level.FATAL, fmt, args)

    def panic(self, carrier: CarrierLike, fmt: str, *args: Any) -> None:
        """Log at PANIC; the backend raises ``PanicError`` after writing."""
        self._call(carrier, Level.PANIC, fmt, args)

    def log(self, level: Level | str, carrier: CarrierLike, fmt: str, *args: Any) -> None:
        self._call(carrier, Level.parse(level), fmt, args)

    def error_with_stack_trace(self, carrier: CarrierLike, err: BaseException) -> None:
        """Log ``err`` at ERROR, attaching its stack trace when it exposes one.

        The error message is used verbatim as the template.
        """
        self._call(with_stack_trace(as_carrier(carrier), err), Level.ERROR, str(err), ())

    def _call(
        self,
        carrier: CarrierLike,
        level: Level,
        fmt: str,
        args: tuple[Any, ...],
    ) -> None:
        entry: BackendEntry = self._factory()
        if level < entry.get_level():
            return

        extended = with_caller(
            as_carrier(carrier),
            resolve_caller(self._caller_frames_to_skip),
        )

        # Nothing reaches the entry until every field passed the skip rules.
        rules = self.skip_rules
        attached: list[tuple[Field, Any]] = []
        for field in self.fields.snapshot():
            value = extended.value(field)
            if value is None:
                continue
            if rules.matches(field, value):
                return
            attached.append((field, value))

        for field, value in attached:
            entry = entry.with_field(str(field), value)
        getattr(entry, level.method_name)(fmt, *args)


_default_logger = Logger()


def get_default_logger() -> Logger:
    """Return the process-wide logger behind the module-level functions."""
    return _default_logger


def set_factory(factory: BackendFactory) -> None:
    """Replace the backend factory of the default logger.

    Takes effect for every subsequent call. Not meant for high-frequency
    swapping from concurrent threads.
    """
    _default_logger.factory = factory


def get_factory() -> BackendFactory:
    return _default_logger.factory


def set_caller_frames_to_skip(value: int) -> None:
    _default_logger.caller_frames_to_skip = value


# Bound methods: no wrapper frame between the call site and Logger._call.
debug = _default_logger.debug
info = _default_logger.info
warn = _default_logger.warn
warning = _default_logger.warning
error = _default_logger.error
fatal = _default_logger.fatal
panic = _default_logger.panic
log = _default_logger.log
error_with_stack_trace = _default_logger.error_with_stack_trace
field_values = _default_logger.field_values
register_field = _default_logger.register_field
unregister_field = _default_logger.unregister_field
skip = _default_logger.skip
