"""
Structured logging configuration using structlog.

Log output goes to the process stderr (sys.__stderr__), never to whatever
sys.stderr currently points at, so log events never mix with text a command
prints while its output is being captured.
"""

import logging
import os
import sys
from typing import Any, TextIO

import structlog

LOG_LEVEL_ENV = "SIFT_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def _resolve_level(level: str | None) -> int:
    name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        return logging.WARNING
    return resolved


def configure_logging(level: str | None = None, stream: TextIO | None = None) -> None:
    """
    Configure structlog for the application.

    Args:
        level: Minimum level name (DEBUG, INFO, ...). Defaults to
            $SIFT_LOG_LEVEL, then WARNING.
        stream: Destination stream. Defaults to the process stderr.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.ConsoleRenderer(colors=False),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream if stream is not None else (sys.__stderr__ or sys.stderr)),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("analysis_started", project="demo")
    """
    return structlog.get_logger(name)
