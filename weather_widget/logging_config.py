"""Structured logging configuration for the weather widget.

JSON records go to a rotating ``widget.log`` (10MB x 5) and readable lines to
the console. The log directory defaults to ``logs/`` next to the package and
can be moved with the LOG_DIR environment variable.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

DEFAULT_LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FILE = "widget.log"

# Chatty libraries that only matter when something is wrong
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def _parse_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")
    return level


def setup_logging(log_level: str = "INFO", log_dir: Path | str | None = None) -> logging.Logger:
    """Configure JSON file logging and console logging on the root logger.

    Args:
        log_level: Console and root level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for widget.log, created if missing

    Returns:
        Configured root logger instance

    Raises:
        ValueError: If log_level is not a logging level name
    """
    level = _parse_level(log_level)
    directory = Path(log_dir) if log_dir else DEFAULT_LOG_DIR
    directory.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    # The file keeps debug detail (stale responses, location denial) whatever the console shows
    file_handler = RotatingFileHandler(
        directory / LOG_FILE,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(filename)s %(lineno)d",
            timestamp=True,
        )
    )
    file_handler.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with structured logging support."""
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **extra_fields: Any,
) -> None:
    """Log a message with structured context fields.

    Args:
        logger: Logger instance
        level: Log level name (debug, info, warning, error, critical)
        message: Log message
        **extra_fields: Fields added to the JSON record, e.g. event_type, city, token
    """
    getattr(logger, level.lower())(message, extra=extra_fields)
