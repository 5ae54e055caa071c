"""
================================================================================
Configuration Loader
================================================================================

Key/value configuration management with environment variable override support.

Features:
    - Java-style ``key=value`` properties files (``config/config.properties``)
    - YAML files flattened to the same dotted keys
    - Environment variable override (API_BASE_URL overrides api.base.url)
    - Typed getters with defaults
    - Browser engine resolved once, at load time

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .logging_config import get_logger


# Default configuration file path (repo root / config / config.properties)
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.properties"

# Environment variable that points at an alternative configuration file
CONFIG_PATH_ENV = "QA_CONFIG_PATH"

DEFAULT_BROWSER = "chromium"
DEFAULT_WAIT_TIMEOUT_MS = 5000
DEFAULT_ENVIRONMENT = "staging"

# Keys whose environment overrides are captured even when the file omits them
KNOWN_KEYS = (
    "browser.type",
    "browser.headless",
    "app.base.url",
    "api.base.url",
    "api.timeout",
    "api.retry.max_attempts",
    "api.retry.initial_interval",
    "api.retry.multiplier",
    "api.retry.max_interval",
    "wait.timeout",
    "environment",
    "logging.level",
    "logging.file",
)


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


class BrowserEngine(str, Enum):
    """Browser engines Playwright can launch."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"

    @classmethod
    def parse(cls, name: Optional[str], log=None) -> "BrowserEngine":
        """
        Resolve an engine name, falling back to chromium on unknown input.

        Args:
            name: Engine name from configuration (case-insensitive)
            log: Logger used to report the fallback
        """
        log = log or get_logger("ConfigLoader")
        normalized = (name or "").strip().lower()
        for engine in cls:
            if engine.value == normalized:
                return engine

        log.warning(
            f"Unrecognized browser type '{name}', falling back to {cls.CHROMIUM.value}"
        )
        return cls.CHROMIUM


class ConfigLoader:
    """
    Configuration loader for properties/YAML files with environment overrides.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (API_BASE_URL)
        2. Configuration file
        3. Default values

    Each instance reads its file and the environment exactly once; values
    are read-only afterwards. Create a new instance to pick up changes to
    either.

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("api.base.url", "http://localhost:8000")
        'https://dummy.restapiexample.com'

        >>> config.wait_timeout
        5000

    Environment Variable Mapping:
        - api.base.url -> API_BASE_URL
        - browser.type -> BROWSER_TYPE
        - browser.headless -> BROWSER_HEADLESS
    """

    def __init__(self, config_path: Optional[Path] = None, log=None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to a ``.properties`` or ``.yaml`` file.
                        Falls back to $QA_CONFIG_PATH, then DEFAULT_CONFIG_PATH.
            log: Logger to use (defaults to a ``ConfigLoader`` bound logger)
        """
        self._log = log or get_logger("ConfigLoader")

        env_path = os.environ.get(CONFIG_PATH_ENV)
        self._config_path = Path(config_path or env_path or DEFAULT_CONFIG_PATH)
        self._config: Dict[str, str] = self._load_config()
        self._values: Dict[str, str] = self._apply_env_overrides(self._config)
        self._browser_engine = BrowserEngine.parse(
            self.get("browser.type", DEFAULT_BROWSER), log=self._log
        )

    @staticmethod
    def _apply_env_overrides(file_values: Dict[str, str]) -> Dict[str, str]:
        """Snapshot of file values with environment overrides applied."""
        values = dict(file_values)
        for key in set(file_values) | set(KNOWN_KEYS):
            env_value = os.environ.get(env_key_for(key))
            if env_value is not None:
                values[key] = env_value
        return values

    @property
    def path(self) -> Path:
        """Path the configuration was loaded from."""
        return self._config_path

    def _load_config(self) -> Dict[str, str]:
        """Load configuration from the properties or YAML file."""
        if not self._config_path.exists():
            self._log.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            return {}

        try:
            text = self._config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read configuration file {self._config_path}: {e}"
            ) from e

        if self._config_path.suffix.lower() in (".yaml", ".yml"):
            try:
                data = yaml.safe_load(text) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Invalid YAML in configuration file: {e}"
                ) from e
            if not isinstance(data, dict):
                raise ConfigurationError(
                    f"Top level of {self._config_path} must be a mapping"
                )
            config = _flatten(data)
        else:
            config = parse_properties(text)

        self._log.info(f"Configuration properties loaded from: {self._config_path}")
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dotted key.

        Reads the snapshot taken at load time (environment overrides already
        applied), then falls back to default.
        Values are converted to the type of ``default`` when one is given.

        Args:
            key: Dotted key (e.g., "api.base.url")
            default: Default value if key not found

        Returns:
            Configuration value or default

        Examples:
            >>> config.get("browser.headless", True)
            True

            >>> config.get("api.retry.max_attempts", 5)
            5
        """
        value = self._values.get(key)
        if value is None or value == "":
            return default

        return self._convert_type(value, default)

    def as_dict(self) -> Dict[str, str]:
        """Copy of the values loaded from file (without env overrides)."""
        return dict(self._config)

    # =========================================================================
    # Typed getters
    # =========================================================================

    @property
    def browser_engine(self) -> BrowserEngine:
        """Browser engine resolved from ``browser.type``."""
        return self._browser_engine

    @property
    def browser_type(self) -> str:
        return self._browser_engine.value

    @property
    def headless(self) -> bool:
        headless = self.get("browser.headless", True)
        self._log.debug(f"Headless mode: {headless}")
        return headless

    @property
    def app_base_url(self) -> Optional[str]:
        base_url = self.get("app.base.url")
        self._log.debug(f"Base URL: {base_url}")
        return base_url

    @property
    def api_base_url(self) -> Optional[str]:
        api_url = self.get("api.base.url")
        self._log.debug(f"API Base URL: {api_url}")
        return api_url

    @property
    def wait_timeout(self) -> int:
        """Default wait timeout in milliseconds."""
        timeout = self.get("wait.timeout", DEFAULT_WAIT_TIMEOUT_MS)
        if not isinstance(timeout, int):
            raise ConfigurationError(f"wait.timeout must be an integer, got {timeout!r}")
        self._log.debug(f"Wait timeout: {timeout}ms")
        return timeout

    @property
    def environment(self) -> str:
        env = self.get("environment", DEFAULT_ENVIRONMENT)
        self._log.debug(f"Environment: {env}")
        return env

    def _convert_type(self, value: Any, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Properties files and environment variables only carry strings.
        """
        if reference is None or not isinstance(value, str):
            return value

        if isinstance(reference, bool):
            return value.strip().lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value


def env_key_for(key: str) -> str:
    """Environment variable name for a dotted key (api.base.url -> API_BASE_URL)."""
    return key.upper().replace(".", "_")


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse ``key=value`` (or ``key: value``) lines.

    Blank lines and lines starting with ``#`` or ``!`` are ignored. A line
    without a separator maps the key to an empty string.
    """
    properties: Dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line[0] in "#!":
            continue

        separators = [i for i in (line.find("="), line.find(":")) if i != -1]
        if not separators:
            properties[line] = ""
            continue

        index = min(separators)
        key = line[:index].strip()
        properties[key] = line[index + 1:].strip()
    return properties


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, str]:
    """Flatten nested YAML mappings into dotted keys with string values."""
    flat: Dict[str, str] = {}
    for key, value in data.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(_flatten(value, dotted))
        elif isinstance(value, bool):
            flat[dotted] = "true" if value else "false"
        elif value is None:
            flat[dotted] = ""
        else:
            flat[dotted] = str(value)
    return flat


__all__ = [
    "BrowserEngine",
    "ConfigLoader",
    "ConfigurationError",
    "parse_properties",
]
