#!/usr/bin/env python3
"""Layered configuration for filepathfilter.

This module provides configuration management with:
- 4-level precedence hierarchy
- YAML config files
- Environment variable overrides
- Thread-safe reads and updates

Example:
    >>> config = ConfigManager()
    >>> config.load_file("filepathfilter.yaml")
    >>> config.get_patterns("include")
    ['src/**', '*.py']
"""

import copy
import os
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from filepathfilter.core.constants import DEFAULT_CONFIG, ConfigKey, ErrorCode, FilterKind
from filepathfilter.core.validators import ValidationError, validate_pattern_list

ENV_PREFIX = "FILEPATHFILTER_"

# Environment keys whose values are comma-separated lists.
_LIST_KEYS = {ConfigKey.INCLUDE, ConfigKey.EXCLUDE}


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    USER_CONFIG = 2
    ENVIRONMENT = 3
    RUNTIME = 4  # Highest precedence


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ConfigManager:
    """Thread-safe hierarchical configuration manager.

    Manages configuration from multiple sources with precedence:
    1. Compiled defaults (lowest)
    2. User config
    3. Environment variables (FILEPATHFILTER_*)
    4. Runtime updates (highest)

    Lists are replaced, not concatenated, when a higher source sets them.
    """

    def __init__(self, config_file: Optional[str] = None, load_environment: bool = True):
        """Initialize configuration manager.

        Args:
            config_file: Optional YAML file to load as user config
            load_environment: Whether to read FILEPATHFILTER_* variables
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}
        self._lock = threading.RLock()

        self._config[ConfigSource.COMPILED_DEFAULTS] = copy.deepcopy(DEFAULT_CONFIG)

        if config_file:
            self.load_file(config_file)

        if load_environment:
            self._load_environment()

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from YAML file.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        path = Path(file_path).expanduser().resolve()

        if not path.exists():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}", ErrorCode.INVALID_INPUT)
        except OSError as e:
            raise ConfigError(f"Error loading config {file_path}: {e}", ErrorCode.INTERNAL_ERROR)

        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}", ErrorCode.INVALID_INPUT)

        self.load_dict(config_data, source)

    def load_dict(self, config_data: Dict[str, Any], source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Load configuration from dictionary.

        A dictionary without the top-level ``filepathfilter`` key is wrapped
        in one.

        Args:
            config_data: Configuration dictionary
            source: Configuration source level
        """
        if ConfigKey.ROOT not in config_data:
            config_data = {ConfigKey.ROOT: config_data}
        with self._lock:
            self._config[source] = copy.deepcopy(config_data)

    def _load_environment(self) -> None:
        """Load configuration from environment variables.

        Environment variables in format: FILEPATHFILTER_SECTION_KEY=value
        Example: FILEPATHFILTER_FILTER_EXCLUDE=build,*.pyc
        """
        env_config: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            parts = key[len(ENV_PREFIX):].lower().split("_")

            current = env_config
            for part in parts[:-1]:
                current = current.setdefault(part, {})

            if parts[-1] in _LIST_KEYS:
                current[parts[-1]] = [item.strip() for item in value.split(",") if item.strip()]
            else:
                current[parts[-1]] = self._parse_env_value(value)

        if env_config:
            self.load_dict(env_config, ConfigSource.ENVIRONMENT)

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value.

        Args:
            value: String value from environment

        Returns:
            Parsed value (int, bool, or str)
        """
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path below the ``filepathfilter`` root
                 (e.g., "filter.include")
            default: Default value if key not found

        Returns:
            A copy of the configuration value, or default
        """
        with self._lock:
            for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
                value = self._get_nested(self._config[source], f"{ConfigKey.ROOT}.{key}")
                if value is not None:
                    return copy.deepcopy(value)

            return default

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        current: Any = config
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Set configuration value.

        Args:
            key: Dot-separated key path below the ``filepathfilter`` root
            value: Value to set
            source: Configuration source level
        """
        with self._lock:
            current = self._config.setdefault(source, {}).setdefault(ConfigKey.ROOT, {})

            parts = key.split(".")
            for part in parts[:-1]:
                current = current.setdefault(part, {})

            current[parts[-1]] = value

    def get_patterns(self, kind: str) -> List[str]:
        """Get the validated pattern list for one side of the filter.

        Args:
            kind: "include" or "exclude"

        Returns:
            List of raw pattern strings

        Raises:
            ConfigError: If ``kind`` is unknown or the configured list is invalid
        """
        try:
            kind = FilterKind(kind).value
        except ValueError:
            raise ConfigError(f"Unknown pattern list: {kind}")

        value = self.get(f"{ConfigKey.FILTER}.{kind}", default=[])
        try:
            return validate_pattern_list(value, name=kind)
        except ValidationError as e:
            raise ConfigError(str(e), e.error_code)

    def clear(self, source: Optional[ConfigSource] = None) -> None:
        """Clear configuration.

        Args:
            source: Specific source to clear, or None for all except defaults
        """
        with self._lock:
            if source:
                if source in self._config and source != ConfigSource.COMPILED_DEFAULTS:
                    del self._config[source]
            else:
                for s in [s for s in self._config if s != ConfigSource.COMPILED_DEFAULTS]:
                    del self._config[s]


# Global config manager instance
_global_config: Optional[ConfigManager] = None


def get_config_manager(config_file: Optional[str] = None) -> ConfigManager:
    """Get or create global configuration manager.

    Args:
        config_file: Optional config file to load

    Returns:
        Global configuration manager
    """
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager(config_file)
    return _global_config


def set_global_config(config: Optional[ConfigManager]) -> None:
    """Set the global configuration manager.

    Args:
        config: Configuration manager to use globally, or None to reset
    """
    global _global_config
    _global_config = config
