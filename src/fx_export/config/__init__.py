"""Config – 12-factor settings and their validation errors."""

from fx_export.config.settings import (
    EnvSettingsLoader,
    ExportSettings,
    Settings,
    SettingsLoader,
    load_settings,
)
from fx_export.config.validation import ConfigError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "ExportSettings",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "load_settings",
]
