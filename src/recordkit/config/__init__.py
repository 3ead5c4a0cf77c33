"""Config – 12-factor settings, loaders and store construction."""

from recordkit.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from recordkit.config.store import StoreSettings, configure_logging, create_store
from recordkit.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "StoreSettings",
    "configure_logging",
    "create_store",
]
