"""Backend implementations.

- std: standard library ``logging`` text lines
- structured: structlog (JSON or console)
- memory: in-memory recording for tests
"""

from .memory import LogRecord, MemoryBackend, MemoryEntry
from .std import FieldsFormatter, StdBackend, StdEntry, new_std_factory
from .structured import (
    StructlogBackend,
    StructlogEntry,
    build_structlog_logger,
    new_structlog_factory,
)

__all__ = [
    # Standard library
    "StdBackend",
    "StdEntry",
    "FieldsFormatter",
    "new_std_factory",
    # structlog
    "StructlogBackend",
    "StructlogEntry",
    "build_structlog_logger",
    "new_structlog_factory",
    # Testing
    "MemoryBackend",
    "MemoryEntry",
    "LogRecord",
]
