"""
Logging setup for the formulatron namespace.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached here, once, by the CLI entry point.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Route 'formulatron.*' records to stderr and, optionally, a file.

    Calling this again replaces the previous handlers, closing any open log
    file, so repeated CLI invocations in one process never double-log.

    Args:
        level: Threshold for the package logger and its handlers
        log_file: Path of a log file to (over)write alongside stderr
    """
    logger = logging.getLogger("formulatron")
    logger.setLevel(level)

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    # stdout carries --json output
    logger.addHandler(_handler(logging.StreamHandler(sys.stderr), level))
    if log_file:
        logger.addHandler(
            _handler(logging.FileHandler(log_file, mode="w", encoding="utf-8"), level)
        )

    logger.debug("Logging at %s", logging.getLevelName(level))
