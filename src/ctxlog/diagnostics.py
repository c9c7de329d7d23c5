"""Internal diagnostics for the library itself.

Configuration changes are reported as structured events on the stdlib
``ctxlog`` logger hierarchy. They are silent unless the host application
enables that logger, so importing the library never produces output.
"""

import logging

import structlog


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for library diagnostics.

    Args:
        name: Logger name (defaults to ``ctxlog``)

    Returns:
        structlog logger routed through stdlib ``logging``
    """
    return structlog.wrap_logger(
        logging.getLogger(name or "ctxlog"),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.KeyValueRenderer(key_order=["event"], sort_keys=True),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )
