"""Settings model, validation, and the layered settings loader."""

from schema_sentinel.config.loader import ConfigLoadError, load_settings
from schema_sentinel.config.settings import (
    SETTINGS_FIELDS,
    ConfigValidationError,
    ConfigValidationIssue,
    SettingsValidationResult,
    ValidatorSettings,
    assert_valid_settings,
    default_settings,
    validate_settings,
)

__all__ = [
    "SETTINGS_FIELDS",
    "ConfigLoadError",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "SettingsValidationResult",
    "ValidatorSettings",
    "assert_valid_settings",
    "default_settings",
    "load_settings",
    "validate_settings",
]
