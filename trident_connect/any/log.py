"""
Logging setup for trident-connect.

All modules obtain their logger through get_logger(). setup_logging() is called
once by the CLI root callback. Library users get a WARNING-level stderr setup when
this module is imported, unless they configured structlog themselves first.

Usage:
    from trident_connect.any.log import get_logger, setup_logging

    setup_logging(debug=True)
    LOGGER = get_logger("trident_connect.kube.pods")
    LOGGER.debug(f"Running command: {' '.join(cmd)}")
"""

import logging
import sys
from typing import Any, TextIO

import structlog


def setup_logging(debug: bool = False, stream: TextIO | None = None) -> None:
    """
    Configure structlog for console output.

    Args:
    ----
        debug: Emit DEBUG and INFO records when True, only WARNING and above otherwise
        stream: Output stream (defaults to stderr so stdout stays clean for command output)

    """
    level = logging.DEBUG if debug else logging.WARNING

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        # Reconfiguration (tests, repeated CLI runs) must reach module-level loggers
        cache_logger_on_first_use=False,
    )


def configure_default_logging() -> None:
    """Install the non-debug setup unless structlog has already been configured."""
    if not structlog.is_configured():
        setup_logging(debug=False)


def get_logger(name: str) -> Any:
    """
    Get a logger instance for the given name.

    Args:
    ----
        name: Logger name, typically the dotted module path

    Returns:
    -------
        Lazy structlog logger carrying ``logger_name=name`` in every record

    """
    return structlog.get_logger(logger_name=name)


configure_default_logging()
