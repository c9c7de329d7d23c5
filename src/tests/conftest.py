"""Pytest configuration and shared fixtures."""

import io
import os
from collections.abc import Generator

import pytest

# Settings read the environment lazily; keep the developer's shell out of tests.
for _name in list(os.environ):
    if _name.startswith("CTXLOG_"):
        del os.environ[_name]

from ctxlog import Field, Logger  # noqa: E402
from ctxlog.backends import MemoryBackend  # noqa: E402
from ctxlog.config import get_settings  # noqa: E402

FIELD_COMPONENT = Field("component")
FIELD_ASSET = Field("asset")


@pytest.fixture
def memory_backend() -> MemoryBackend:
    """In-memory backend at INFO threshold."""
    return MemoryBackend(level="INFO")


@pytest.fixture
def logger(memory_backend: MemoryBackend) -> Logger:
    """Fresh logger with component and asset registered, writing to memory."""
    log = Logger(memory_backend.factory)
    log.register_field(FIELD_COMPONENT, FIELD_ASSET)
    return log


@pytest.fixture
def stream() -> io.StringIO:
    """Output stream for text and JSON backends."""
    return io.StringIO()


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Drop cached settings so each test sees its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (go through real backends)"
    )
    config.addinivalue_line("markers", "slow: Slow tests")
