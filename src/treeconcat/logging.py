"""Structured logging for treeconcat.

structlog is configured once, on import, to route through the standard library
logging machinery. Library code only obtains loggers; handlers and levels are
attached by the command-line interface through setup_logging().
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from pathlib import Path

_STRUCTLOG_CONFIGURED = False

VERBOSITY_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def _configure_structlog() -> None:
    global _STRUCTLOG_CONFIGURED
    if _STRUCTLOG_CONFIGURED:
        return
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _STRUCTLOG_CONFIGURED = True


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to the given module name."""
    _configure_structlog()
    return structlog.get_logger(name)


def setup_logging(verbosity: int = 0, filename: str | Path | None = None) -> Any:
    """Set up log output for the treeconcat command-line interface.

    Args:
        verbosity: Number of -v flags given. 0 logs warnings, 1 adds info, 2 or more adds debug.
        filename: Optional path to a log file. If None, logs are written to stderr.

    Returns:
        A structlog logger for the treeconcat package.
    """
    handlers: list[logging.Handler] = []
    if filename:
        handlers.append(logging.FileHandler(str(filename), encoding="utf-8"))
    else:
        handlers.append(logging.StreamHandler(sys.stderr))

    logging.basicConfig(
        level=VERBOSITY_LEVELS.get(verbosity, logging.DEBUG),
        handlers=handlers,
        format="%(message)s",
        force=True,
    )
    return get_logger("treeconcat")
