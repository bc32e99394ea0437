"""Logging configuration for swarmcity-installer.

Every entry is a JSON line: the CLI appends them to swarmCity.log in the
installation directory, tests without a log file get them on stderr.
"""

import logging
import sys
from pathlib import Path

import structlog


def _handler(log_file: str | Path | None) -> logging.Handler:
    if log_file:
        # Append only; earlier runs stay in the log
        return logging.FileHandler(str(log_file), mode="a", encoding="utf-8")
    return logging.StreamHandler(sys.stderr)


def configure_logging(level: str = "info", log_file: str | Path | None = None) -> None:
    """Route structlog through stdlib logging as JSON lines.

    Args:
        level: Log level (debug, info, warning, error, critical)
        log_file: Installer log; stderr when omitted
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    handler = _handler(log_file)
    handler.setLevel(log_level)
    logging.basicConfig(level=log_level, handlers=[handler], format="%(message)s", force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Module-level loggers must pick up a later configure_logging call
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance."""
    return structlog.get_logger(name)
