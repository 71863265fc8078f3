"""
Logging configuration for Docker Utility.

This module provides centralized logging configuration for the entire application.
Console output goes to stderr so that command output on stdout (for example the
JSON written by ``export``) is never mixed with log records.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

from docker_utility.config import LOG_FILE, LOG_LEVEL, SERVICE_NAME


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name. If None, uses the default service name.

    Returns:
        Configured logger instance.
    """
    if name is None:
        name = SERVICE_NAME

    # Check if logger already exists
    logger_instance = logging.getLogger(name)

    # Only configure if not already configured
    if not logger_instance.handlers:
        configure_logger(logger_instance)

    return logger_instance


def configure_logger(logger_instance: logging.Logger, log_file: Optional[Union[str, Path]] = None) -> None:
    """
    Configure a logger instance with console and optional file handlers.

    Args:
        logger_instance: Logger instance to configure.
        log_file: Path of a log file. Falls back to the LOG_FILE environment
            variable; no file handler is added when neither is set.
    """
    logger_instance.setLevel(_level_from_name(LOG_LEVEL))

    log_file = log_file or LOG_FILE
    if log_file:
        try:
            if isinstance(log_file, str):
                log_file = Path(os.path.expanduser(log_file))

            # Ensure parent directory exists
            log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(logging.Formatter(
                '[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s'
            ))
            logger_instance.addHandler(file_handler)
        except OSError as e:
            # If file logging fails, just use console
            print(f"Warning: Could not set up file logging: {e}", file=sys.stderr)

    # Console handler (always add)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    logger_instance.addHandler(console_handler)


def set_debug(enabled: bool = True) -> None:
    """Switch the default logger to DEBUG so traced runtime commands are shown."""
    if enabled:
        logger.setLevel(logging.DEBUG)


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


# Create a default logger instance
logger = get_logger(SERVICE_NAME)


__all__ = ["get_logger", "logger", "configure_logger", "set_debug"]
