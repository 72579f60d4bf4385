"""
Logging configuration for touchmath.

The engine modules only ever call get_logger(__name__); the host (or the
replay entry point) decides where output goes by calling setup_logger
on the package logger.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: str) -> int:
    """Map a level name to its numeric value, WARNING for unknown names."""
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logger(
    name: str = "touchmath",
    level: str = "WARNING",
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure a logger with stdout output and an optional log file.

    Calling it again replaces the handlers installed by the previous call,
    so a logger never ends up with duplicate output.

    Args:
        name: Logger name (the package logger by default)
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Append log records to this file as well

    Returns:
        Configured logger instance

    Raises:
        OSError: If the log file cannot be opened
    """
    logger = logging.getLogger(name)
    numeric_level = _resolve_level(level)
    logger.setLevel(numeric_level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    # Records stay inside the touchmath hierarchy
    logger.propagate = False

    if log_file is not None:
        logger.debug(f"Logging to file: {log_file}")

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module (pass __name__)."""
    return logging.getLogger(name)
