"""
Logging Configuration for the Skill Badge competency engine

The engine only creates module loggers (`skillbadge.*`); handlers belong to
the host application. Hosts without their own logging setup can call
setup_logging() before load_config_on_startup() so that warnings about
skipped definition files reach the console.
"""

import logging
import sys
from typing import TextIO

from skillbadge.config import settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(log_level: str) -> tuple[str, int]:
    level_upper = log_level.upper()
    return level_upper, getattr(logging, level_upper, logging.INFO)


def _console_handler(level: int, stream: TextIO | None) -> logging.Handler:
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(log_level: str | None = None, stream: TextIO | None = None) -> None:
    """
    Route engine logs to a single console handler on the root logger.

    Args:
        log_level: Level name, defaults to settings.LOG_LEVEL.
            Unknown names fall back to INFO.
        stream: Where records go, stdout unless given
    """
    level_upper, numeric_level = _resolve_level(log_level or settings.LOG_LEVEL)

    root_logger = logging.getLogger()
    # repeated calls replace the handler instead of stacking a new one
    root_logger.handlers.clear()
    root_logger.setLevel(numeric_level)
    root_logger.addHandler(_console_handler(numeric_level, stream))

    logging.getLogger(__name__).info(
        "Logging configured: level=%s, handler=console", level_upper
    )


def update_log_level(log_level: str) -> None:
    """
    Change the root level (and its handlers) without reconfiguring.

    Set DEBUG to see which ids a rejected selection dropped and which
    mandatory-set override applied.

    Args:
        log_level: New log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level_upper, numeric_level = _resolve_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers:
        handler.setLevel(numeric_level)

    logging.getLogger(__name__).info("Log level updated to: %s", level_upper)
