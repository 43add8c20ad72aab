"""Structured logging built on structlog.

Call :func:`setup_logging` once at process start (the FastAPI lifespan or
the CLI entry point) and obtain loggers with :func:`get_logger`.  Log
calls use an event name plus key/value context::

    logger = get_logger(__name__)
    logger.info("catalog_loaded", skills=12, issues=1)
"""

from __future__ import annotations

import logging
import sys

import structlog


def setup_logging(debug: bool = False, level: str | None = None) -> None:
    """Configure stdlib logging and structlog.

    Debug mode renders human-friendly coloured lines; otherwise each event
    is emitted as a single JSON object.  Output goes to stderr so that CLI
    results on stdout stay machine-readable.
    """
    log_level = (level or ("DEBUG" if debug else "INFO")).upper()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to *name*."""
    return structlog.get_logger(name)
