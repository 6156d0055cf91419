"""
Logging configuration for the VolleyManager session client.

Library code only logs through ``logging.getLogger(__name__)`` or the
logger handed in via ``AuthServiceConfig``; handlers are configured here
for the command-line entry point.
"""

import logging
import time
from pathlib import Path
from typing import Optional


PACKAGE_LOGGER = "volleymanager_auth"


def setup_logger(log_level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger for the command line.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a file that also receives DEBUG output

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(logging.DEBUG if log_file else level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


class LoggerContext:
    """Log the start and duration of an operation."""

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.started = 0.0

    def __enter__(self):
        self.started = time.monotonic()
        self.logger.info(f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.monotonic() - self.started
        if exc_type is not None:
            self.logger.error(f"Failed {self.operation} after {duration:.2f}s: {exc_val}")
        else:
            self.logger.info(f"Completed {self.operation} in {duration:.2f}s")
        return False
