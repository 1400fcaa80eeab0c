"""Config settings – 12-factor env-based configuration."""
from fx_export.config.settings.factory import SettingsFactory, load_settings
from fx_export.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from fx_export.config.settings.models import ExportSettings, Settings

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "ExportSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "load_settings",
]
