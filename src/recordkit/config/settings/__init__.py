"""Config settings – 12-factor env-based configuration."""
from recordkit.config.settings.base import Settings
from recordkit.config.settings.factory import SettingsFactory
from recordkit.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsFactory", "SettingsLoader"]
