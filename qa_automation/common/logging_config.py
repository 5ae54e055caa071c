"""
================================================================================
Logging Configuration
================================================================================

Centralized Loguru setup for the harness.

Components do not reach for a module-level logger of their own. They accept a
``log`` argument at construction and fall back to ``get_logger(<component>)``,
which is the shared loguru logger bound to a component name.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> | {message}"
)

_logger_initialized: bool = False


def init_logger(
    level: str = "INFO",
    format_str: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format_str: Custom log format string
        log_file: Optional file path for a rotating file sink
        force: Re-initialize even if already configured
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    log_format = format_str or DEFAULT_LOG_FORMAT

    logger.remove()
    logger.configure(extra={"component": "qa"})
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=level.upper(),
            format=log_format.replace("{level: <8}", "{level}"),
            rotation="10 MB",
            retention="7 days",
            compression="zip",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


def init_logger_from_config(config) -> None:
    """Initialize logging from ``logging.level`` / ``logging.file`` keys."""
    init_logger(
        level=config.get("logging.level", "INFO"),
        log_file=config.get("logging.file"),
    )


def get_logger(component: str):
    """
    Return the shared logger bound to a component name.

    Args:
        component: Name shown in the ``component`` column of log lines
    """
    return logger.bind(component=component)


__all__ = [
    "get_logger",
    "init_logger",
    "init_logger_from_config",
]
