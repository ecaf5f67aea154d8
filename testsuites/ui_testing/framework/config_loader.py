"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - YAML configuration loading
    - Environment variable override (UI_BASE_URL overrides ui.base_url)
    - Legacy aliases (HEADLESS, LOG_LEVEL)
    - Dot notation path access
    - Default value support

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


# Default configuration file path: testsuites/config/config.yaml
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

# Environment variables honoured in addition to the derived KEY_NAME form
ENV_ALIASES: Dict[str, str] = {
    "ui.headless": "HEADLESS",
    "logging.level": "LOG_LEVEL",
}


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (UI_BASE_URL, then legacy alias HEADLESS/LOG_LEVEL)
        2. YAML configuration file
        3. Default values

    One loader per load: test cases build their own and pass the resulting
    settings explicitly, nothing is cached process-wide.

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("ui.base_url", "https://www.saucedemo.com/")
        'https://www.saucedemo.com/'
        >>> config.get("ui.default_timeout_ms", 10000)
        10000
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file.
                        Uses DEFAULT_CONFIG_PATH if not specified.
        """
        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping, got {type(loaded).__name__}"
            )
        self._config = loaded
        logger.debug(f"Loaded configuration from: {self._config_path}")

    @property
    def path(self) -> Path:
        return self._config_path

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.

        Args:
            key: Dot-notation path (e.g., "ui.base_url")
            default: Default value if key not found

        Returns:
            Configuration value or default

        Examples:
            >>> config.get("ui.headless", True)
            True
            >>> config.get("retry.max_attempts", 3)
            3
        """
        env_value = self._env_value(key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get entire configuration section.

        Args:
            section: Section name (e.g., "ui", "retry")

        Returns:
            Section dictionary or empty dict if not found
        """
        return self._config.get(section, {}) or {}

    def reload(self) -> None:
        """
        Reload configuration from file.

        Useful when configuration file has been updated during runtime.
        """
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    @staticmethod
    def _env_value(key: str) -> Optional[str]:
        env_key = key.upper().replace(".", "_")
        value = os.environ.get(env_key)
        if value is None and key in ENV_ALIASES:
            value = os.environ.get(ENV_ALIASES[key])
        return value

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
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


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULT_CONFIG_PATH",
]
