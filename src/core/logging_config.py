"""Structured logging configuration.

This module initializes structlog with a stable JSON event format.
Events go to stderr so command output on stdout stays parseable.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structlog processors and minimum level.

    Args:
        level: Minimum level name, e.g. ``info``.
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)


def _stderr_logger(*_args: object) -> structlog.PrintLogger:
    # Resolve sys.stderr per call; it may be swapped after configuration.
    return structlog.PrintLogger(sys.stderr)
