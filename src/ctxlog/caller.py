"""Caller resolution from the active call stack."""

from __future__ import annotations

import os
import sys

from pydantic import BaseModel, ConfigDict

from .carrier import Carrier
from .diagnostics import get_logger
from .fields import FIELD_CALLER, FIELD_SOURCE_FILE, FIELD_SOURCE_LINE

logger = get_logger(__name__)


class CallerInfo(BaseModel):
    """Source location of a log call site."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: int
    function: str


def resolve_caller(skip: int) -> CallerInfo | None:
    """Resolve the frame ``skip`` levels above the function calling this one.

    ``skip=0`` designates the function that invoked ``resolve_caller``.

    Returns:
        Caller info, or None if the stack is not that deep
    """
    try:
        frame = sys._getframe(skip + 1)
    except ValueError:
        logger.debug("Caller resolution failed", skip=skip)
        return None

    code = frame.f_code
    filename = code.co_filename
    if not filename.startswith("<"):
        filename = os.path.abspath(filename)

    name = getattr(code, "co_qualname", code.co_name)
    module = frame.f_globals.get("__name__")
    function = f"{module}.{name}" if module else name

    # Values come from the interpreter; skip validation on the dispatch path.
    return CallerInfo.model_construct(file=filename, line=frame.f_lineno, function=function)


def with_caller(carrier: Carrier, caller: CallerInfo | None) -> Carrier:
    """Extend ``carrier`` with the caller fields; unchanged if ``caller`` is None."""
    if caller is None:
        return carrier
    return (
        carrier.with_value(FIELD_SOURCE_FILE, caller.file)
        .with_value(FIELD_SOURCE_LINE, caller.line)
        .with_value(FIELD_CALLER, caller.function)
    )
