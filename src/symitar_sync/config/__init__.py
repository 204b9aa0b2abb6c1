"""Configuration package for Symitar synchronization."""

from .settings import (
    AppSettings,
    LicenseSettings,
    LoggingSettings,
    get_settings,
    reset_settings
)

from .schema import SyncConfiguration

from .loader import (
    ConfigLoader,
    load_config_from_env,
    parse_list
)

__all__ = [
    "AppSettings",
    "LicenseSettings",
    "LoggingSettings",
    "get_settings",
    "reset_settings",

    "SyncConfiguration",

    "ConfigLoader",
    "load_config_from_env",
    "parse_list"
]
