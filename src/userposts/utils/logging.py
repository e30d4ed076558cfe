"""
utils/logging.py — structlog setup for userposts.

Every event carries a timestamp, level and the name of the emitting module
under the "logger" key. Output goes to stderr so JSON written to stdout by
the CLI stays machine-readable.

Usage:
    from userposts.utils.logging import configure_logging, get_logger

    log = get_logger(__name__)          # safe at module level
    configure_logging("DEBUG", "json")  # once, at startup
    log.info("fetch_start", url="https://api.example.test/users")
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog._config import BoundLoggerLazyProxy

from userposts.config import settings


def _numeric_level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _renderer(fmt: str) -> Any:
    if fmt == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """Configure structlog; arguments fall back to settings.log_level / log_format."""
    level = _numeric_level(log_level or settings.log_level)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            _renderer(log_format or settings.log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str, **initial_values: Any) -> Any:
    """
    Lazy logger tagged with logger=name plus any initial context.

    Nothing is resolved until the first log call, so module-level loggers
    pick up whatever configure_logging() set later.
    """
    return BoundLoggerLazyProxy(
        None,
        logger_factory_args=(name,),
        initial_values={"logger": name, **initial_values},
    )
