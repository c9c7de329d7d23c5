"""ctxlog: structured logging facade.

Log calls carry their metadata implicitly in a value carrier. The dispatcher
reads the registered fields from it, applies suppression rules, resolves the
call site and hands a complete entry to a pluggable backend.

- fields: recognized metadata keys and their registry
- suppression: skip rules
- carrier: immutable key/value carrier
- caller / stacktrace: call-site and stack-trace extraction
- dispatch: the Logger and module-level logging functions
- backends: std, structlog and in-memory backends
- config / setup: settings and their application
"""

from .backend import BackendEntry, BackendFactory, PanicError, format_message
from .caller import CallerInfo, resolve_caller
from .carrier import EMPTY, Carrier, bind_carrier, bind_values, current_carrier
from .dispatch import (
    DEFAULT_CALLER_FRAMES_TO_SKIP,
    Logger,
    debug,
    error,
    error_with_stack_trace,
    fatal,
    field_values,
    get_default_logger,
    get_factory,
    info,
    log,
    panic,
    register_field,
    set_caller_frames_to_skip,
    set_factory,
    skip,
    unregister_field,
    warn,
    warning,
)
from .fields import (
    BUILTIN_FIELDS,
    FIELD_CALLER,
    FIELD_SOURCE_FILE,
    FIELD_SOURCE_LINE,
    FIELD_STACK_TRACE,
    Field,
    FieldRegistry,
)
from .levels import Level
from .setup import setup_logging
from .suppression import SkipRules
from .stacktrace import StackTracer, WithStack, render_stack_trace, with_stack, with_stack_trace

__version__ = "0.1.0"

__all__ = [
    # Fields
    "Field",
    "FieldRegistry",
    "BUILTIN_FIELDS",
    "FIELD_SOURCE_FILE",
    "FIELD_SOURCE_LINE",
    "FIELD_CALLER",
    "FIELD_STACK_TRACE",
    "SkipRules",
    # Carrier
    "Carrier",
    "EMPTY",
    "bind_carrier",
    "bind_values",
    "current_carrier",
    # Caller and stack traces
    "CallerInfo",
    "resolve_caller",
    "StackTracer",
    "WithStack",
    "with_stack",
    "with_stack_trace",
    "render_stack_trace",
    # Levels and backends
    "Level",
    "BackendEntry",
    "BackendFactory",
    "PanicError",
    "format_message",
    # Dispatch
    "Logger",
    "DEFAULT_CALLER_FRAMES_TO_SKIP",
    "get_default_logger",
    "get_factory",
    "set_factory",
    "set_caller_frames_to_skip",
    "register_field",
    "unregister_field",
    "skip",
    "field_values",
    "debug",
    "info",
    "warn",
    "warning",
    "error",
    "fatal",
    "panic",
    "log",
    "error_with_stack_trace",
    # Setup
    "setup_logging",
]
