"""Structured logging configuration using structlog.

The engines only emit debug events, so nothing is printed unless a caller
opts in with ``configure_logging(debug=True)``.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog

__all__ = [
    "configure_logging",
    "get_logger",
]


def _renderer(*, json_logs: bool) -> structlog.types.Processor:
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=False,
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(
    *,
    debug: bool = False,
    json_logs: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure structured logging for approxtext.

    Args:
        debug: Emit debug events (cache misses, early exits).
        json_logs: Output JSON format (for machine parsing).
        stream: Destination stream, stderr when omitted.
    """
    log_level = logging.DEBUG if debug else logging.WARNING
    output = stream if stream is not None else sys.stderr

    logging.basicConfig(format="%(message)s", stream=output, level=log_level)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_logs:
        processors.append(structlog.processors.format_exc_info)
    processors.append(_renderer(json_logs=json_logs))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        # Tests reconfigure between cases, so bound loggers must not be frozen
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Get a configured logger instance.

    Args:
        name: Logger name (usually module name).
        **initial_values: Initial context values to bind.

    Returns:
        Configured bound logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger
