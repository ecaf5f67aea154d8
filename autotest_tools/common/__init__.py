"""
================================================================================
Autotest Tools Common Utilities
================================================================================

This module provides shared logging setup and small helpers for the UI
automation suite.

Exports:
    - init_logger: Function to initialize loguru logger with standard settings
    - ensure_directory: Create a directory if needed
    - add_timestamp: Suffix a label with a timestamp so it is unique and traceable

Usage:
    from autotest_tools.common import init_logger

    init_logger(level="debug", log_file="reports/logs/ui.log")

================================================================================
"""

import os
import sys
from datetime import datetime
from typing import Optional

from loguru import logger


# Config-level names -> loguru level names
LEVEL_NAMES = {
    "debug": "DEBUG",
    "info": "INFO",
    "warn": "WARNING",
    "warning": "WARNING",
    "error": "ERROR",
}

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


# ============================================================
# Logging Setup
# ============================================================

_logger_initialized = False


def init_logger(
    level: str = "info",
    log_file: Optional[str] = None,
    format_string: str = DEFAULT_FORMAT,
    force: bool = False,
) -> str:
    """
    Initializes the loguru logger with standard settings.

    Args:
        level: Log level (debug, info, warn, error)
        log_file: Optional file path to write logs to
        format_string: Log format string
        force: Re-initialize even if already done

    Returns:
        The loguru level name that was applied

    Example:
        init_logger()  # Use defaults
        init_logger(level="debug", log_file="reports/logs/ui.log")
    """
    global _logger_initialized

    loguru_level = LEVEL_NAMES.get(level.lower())
    if loguru_level is None:
        raise ValueError(f"Unknown log level: {level!r}")

    if _logger_initialized and not force:
        return loguru_level

    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        format=format_string,
        level=loguru_level,
        colorize=True,
    )

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        logger.add(
            log_file,
            format=format_string,
            level=loguru_level,
            rotation="10 MB",
            retention="7 days",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {loguru_level}")
    return loguru_level


# ============================================================
# Common Utilities
# ============================================================

def ensure_directory(path: str) -> str:
    """
    Ensures a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        The path (for chaining)
    """
    os.makedirs(path, exist_ok=True)
    return path


def add_timestamp(label: str, now: Optional[datetime] = None) -> str:
    """
    Append a filesystem-safe timestamp to `label`.

    >>> add_timestamp("checkout", datetime(2024, 1, 2, 3, 4, 5))
    'checkout_2024-01-02T03-04-05-000000'
    """
    stamp = (now or datetime.now()).isoformat(timespec="microseconds")
    return f"{label}_{stamp.replace(':', '-').replace('.', '-')}"


# Export public API
__all__ = [
    "add_timestamp",
    "ensure_directory",
    "init_logger",
]
