"""Structured logging for the document store.

Events are emitted as snake_case names with key/value context, e.g.
``records_tombstoned path=... count=2``. Store loggers bind the log path.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor


def setup_logging(
    level: str | None = None,
    log_format: str | None = None,
) -> None:
    """
    Configure structlog for the process.

    Args:
        level: Log level name (default: ``observability.log_level``)
        log_format: 'json' or 'console' (default: ``observability.log_format``)
    """
    from doclog.infrastructure.config import get_config

    observability = get_config().observability
    numeric_level = getattr(logging, (level or observability.log_level).upper())
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if (log_format or observability.log_format) == "json"
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """Return a logger for ``name`` with ``initial_context`` bound."""
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
