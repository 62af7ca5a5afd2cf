"""
Configuration manager for the sales commission entry form.

Provides QSettings-backed configuration management with default fallbacks
and type safety.
"""

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema
from PySide6.QtCore import QSettings

from .config import CONFIG_JSON_SCHEMA, DEFAULT_CONFIG, setup_qsettings
from .errors import ConfigError, ErrorCode
from .rules import DEFAULT_NAME_POLICY, NamePolicy

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    QSettings-backed configuration manager with robust defaults.

    Provides type-safe access to configuration values with automatic
    fallback to defaults when keys are missing or have invalid types.
    """

    def __init__(self) -> None:
        """Initialize the ConfigManager with QSettings."""
        setup_qsettings()
        self._settings = QSettings()
        self._defaults = DEFAULT_CONFIG.copy()

    def get(self, key: str, default: Any | None = None) -> Any:
        """
        Get a configuration value with fallback to defaults.

        Args:
            key: Configuration key
            default: Override default value (if None, uses DEFAULT_CONFIG)

        Returns:
            Configuration value with type coercion and default fallback
        """
        fallback = default if default is not None else self._defaults.get(key)
        value = self._settings.value(key, fallback)

        if fallback is not None:
            try:
                expected_type = type(fallback)
                if expected_type is bool:
                    # QSettings returns strings for booleans
                    value = value.lower() in ("true", "1", "yes", "on") if isinstance(value, str) else bool(value)
                elif expected_type in (int, float, str):
                    value = expected_type(value)
                elif not isinstance(value, expected_type):
                    logger.warning(f"Config key '{key}' has unexpected type, using default")
                    value = fallback
            except (ValueError, TypeError) as e:
                logger.warning(f"Failed to coerce config key '{key}': {e}, using default")
                value = fallback

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key
            value: Value to store (must be JSON-serializable)
        """
        self._settings.setValue(key, value)
        self._settings.sync()

    def get_name_policy(self) -> NamePolicy:
        """
        Get the configured employee name policy.

        Unknown stored values fall back to the bilingual policy.
        """
        stored = self.get("name_policy")
        try:
            return NamePolicy(stored)
        except ValueError:
            logger.warning(f"Unknown name policy '{stored}', using '{DEFAULT_NAME_POLICY.value}'")
            return DEFAULT_NAME_POLICY

    def set_name_policy(self, policy: NamePolicy) -> None:
        self.set("name_policy", policy.value)

    def load_all(self) -> dict[str, Any]:
        """
        Load all configuration values merged with defaults.

        Returns:
            Dictionary with all configuration keys, using stored values
            where available and defaults for missing keys
        """
        config = self._defaults.copy()

        for key in config:
            stored_value = self.get(key)
            if stored_value is not None:
                config[key] = stored_value

        return config

    def reset_to_defaults(self) -> None:
        """Clear all stored settings and revert to defaults."""
        self._settings.clear()
        self._settings.sync()

        logger.info("Configuration reset to defaults")

    def export_config(self) -> dict[str, Any]:
        """Export current configuration as a dictionary."""
        return self.load_all()

    def import_config(self, config: dict[str, Any]) -> None:
        """
        Import configuration from a dictionary.

        Args:
            config: Dictionary containing configuration values

        Raises:
            ConfigError: If the document does not match the configuration schema
        """
        try:
            jsonschema.validate(config, CONFIG_JSON_SCHEMA)
        except jsonschema.ValidationError as e:
            raise ConfigError(
                code=ErrorCode.CONFIG_INVALID,
                user_message=f"Configuration is invalid: {e.message}",
                technical_message=str(e),
            ) from e

        for key, value in config.items():
            self.set(key, value)

        logger.info(f"Imported {len(config)} configuration value(s)")

    def import_config_file(self, path: Path) -> None:
        """
        Import configuration from a JSON file.

        Args:
            path: Path to a JSON document holding configuration values

        Raises:
            ConfigError: If the file cannot be read or parsed, or does not
                match the configuration schema
        """
        try:
            with open(path, encoding="utf-8") as f:
                config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(
                code=ErrorCode.CONFIG_PARSE_ERROR,
                user_message=f"Could not read configuration file '{path.name}'",
                technical_message=f"Failed to load configuration from {path}: {e}",
            ) from e

        self.import_config(config)

    def has_key(self, key: str) -> bool:
        """Check if a configuration key exists in storage."""
        return self._settings.contains(key)

    def remove_key(self, key: str) -> None:
        """Remove a configuration key from storage."""
        self._settings.remove(key)
        self._settings.sync()
