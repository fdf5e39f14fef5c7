"""Config – masking settings and their loaders."""
from mp_masking.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    MaskingSettings,
    Settings,
    SettingsLoader,
    load_masking_settings,
)
from mp_masking.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MaskingSettings",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "load_masking_settings",
]
