"""Structured logging configuration using structlog.

Console output for development, JSON output for production. Modules obtain
loggers with get_logger(__name__) and never print(). Records are rendered by
structlog and handed to stdlib logging, so uvicorn and pytest handlers see
them too.
"""

import logging
import sys

import structlog

from academic_analytics.config import LOG_JSON, LOG_LEVEL


def setup_logging(json_output: bool = LOG_JSON, log_level: str = LOG_LEVEL) -> None:
    """Configure structlog processors and the stdlib bridge.

    Args:
        json_output: If True, render JSON lines. If False, console format.
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
    )
    logging.getLogger("academic_analytics").setLevel(numeric_level)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger bound with the module name."""
    return structlog.get_logger(name)
