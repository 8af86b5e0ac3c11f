"""Structured logging for pwreport.

Engine modules log through structlog loggers bound to stdlib loggers under
the ``pwreport`` namespace. Until ``configure_logging`` attaches a handler
those events go nowhere, so library callers see no output.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog

PACKAGE_LOGGER = "pwreport"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())

_PROCESSORS: list = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
    structlog.processors.StackInfoRenderer(),
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]


def configure_logging(
    log_level: str = "WARNING",
    json_format: bool = False,
    stream: TextIO | None = None,
) -> None:
    """
    Send pwreport log events to a stream.

    Calling this again replaces the previous handler.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output JSON format; otherwise, console format.
        stream: Output stream (defaults to sys.stderr so stdout stays clean).
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if not isinstance(existing, logging.NullHandler):
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))
    package_logger.propagate = False


def get_logger(name: str) -> Any:
    """
    Get a structlog logger backed by the stdlib logger ``name``.

    Args:
        name: Logger name (typically module name).
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )
