"""
================================================================================
Common Utilities
================================================================================

Configuration and logging shared by the API and UI layers.

Exports:
    - ConfigLoader: key/value configuration with environment overrides
    - BrowserEngine: enumerated browser engines
    - init_logger / get_logger: Loguru setup and component-bound loggers

Author: Automation Team
License: MIT
================================================================================
"""

from .config_loader import BrowserEngine, ConfigLoader, ConfigurationError
from .logging_config import get_logger, init_logger, init_logger_from_config

__all__ = [
    "BrowserEngine",
    "ConfigLoader",
    "ConfigurationError",
    "get_logger",
    "init_logger",
    "init_logger_from_config",
]
