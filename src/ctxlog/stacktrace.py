"""Stack-trace extraction from exceptions.

An exception exposes a stack trace either by implementing
:class:`StackTracer` (see :class:`WithStack`) or by having been raised, in
which case Python attached a traceback to it. An exception that was
constructed but never raised carries neither and renders no trace.
"""

from __future__ import annotations

import sys
import traceback
from typing import Protocol, runtime_checkable

from .carrier import Carrier
from .fields import FIELD_STACK_TRACE


@runtime_checkable
class StackTracer(Protocol):
    """Capability of an error to expose the stack at its creation point."""

    def stack_trace(self) -> traceback.StackSummary: ...


class WithStack(Exception):
    """Wrap an exception together with the stack where the wrapper was created."""

    def __init__(self, cause: BaseException, *, skip: int = 0):
        super().__init__(str(cause))
        self.cause = cause
        self.__cause__ = cause
        self._stack = traceback.extract_stack(sys._getframe(1 + skip))

    def stack_trace(self) -> traceback.StackSummary:
        return self._stack


def with_stack(err: BaseException) -> WithStack:
    """Annotate ``err`` with the caller's stack. Already-annotated errors pass through."""
    if isinstance(err, StackTracer):
        return err  # type: ignore[return-value]
    return WithStack(err, skip=1)


def render_stack_trace(err: BaseException) -> str | None:
    """Render the stack trace exposed by ``err``, or None if it exposes none."""
    if isinstance(err, StackTracer):
        frames = "".join(traceback.format_list(err.stack_trace()))
        return f"{err}\n{frames}".rstrip("\n")
    if err.__traceback__ is not None:
        return "".join(traceback.format_exception(err)).rstrip("\n")
    return None


def with_stack_trace(carrier: Carrier, err: BaseException) -> Carrier:
    """Extend ``carrier`` with the stack trace of ``err`` if it has one."""
    rendered = render_stack_trace(err)
    if rendered is None:
        return carrier
    return carrier.with_value(FIELD_STACK_TRACE, rendered)
