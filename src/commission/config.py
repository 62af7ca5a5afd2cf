"""
Configuration for the sales commission entry form.

This module provides the configuration schema, defaults and the QSettings
application identifiers.
"""

from pathlib import Path
from typing import Any

from PySide6.QtCore import QCoreApplication, QStandardPaths

from .rules import DEFAULT_NAME_POLICY, NamePolicy

# Application identifiers for QSettings
APP_ORGANIZATION = "SalesCommission"
APP_NAME = "Calculator"

# Default configuration with all supported keys and JSON-serializable types
DEFAULT_CONFIG: dict[str, Any] = {
    # Validation
    "name_policy": DEFAULT_NAME_POLICY.value,  # Options: "latin_thai", "latin_only"
    "debounce_ms": 200,
    # Remote endpoint, consumed by the HTTP client
    "api_base_url": "http://localhost:5000",
    # Debug settings
    "log_level": "INFO",  # Options: "DEBUG", "INFO", "WARNING", "ERROR"
}

# JSON Schema for imported configuration documents (draft-07)
CONFIG_JSON_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Sales commission form configuration",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "name_policy": {"type": "string", "enum": [policy.value for policy in NamePolicy]},
        "debounce_ms": {"type": "integer", "minimum": 0, "maximum": 5000},
        "api_base_url": {"type": "string", "pattern": "^https?://"},
        "log_level": {"type": "string", "enum": ["DEBUG", "INFO", "WARNING", "ERROR"]},
    },
}


def get_app_config_dir() -> Path:
    """
    Get the application configuration directory using QStandardPaths.

    Returns:
        Path to the writable configuration directory for this application
    """
    config_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
    return Path(config_location) / APP_ORGANIZATION / APP_NAME


def setup_qsettings() -> None:
    """
    Configure QSettings with application identifiers.

    This should be called early in application startup to ensure
    QSettings uses the correct organization and application names.
    """
    QCoreApplication.setOrganizationName(APP_ORGANIZATION)
    QCoreApplication.setApplicationName(APP_NAME)
