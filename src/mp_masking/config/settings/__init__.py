"""Config settings – 12-factor env-based masking configuration."""
from mp_masking.config.settings.base import MaskingSettings, Settings
from mp_masking.config.settings.loaders import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    SettingsLoader,
    load_masking_settings,
)

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "MaskingSettings",
    "Settings",
    "SettingsLoader",
    "load_masking_settings",
]
