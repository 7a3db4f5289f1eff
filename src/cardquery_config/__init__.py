"""Shared application configuration package."""

from .settings import (
    CORS_WILDCARD,
    Settings,
    clear_settings_cache,
    get_config_dir,
    get_settings,
)

__all__ = [
    "CORS_WILDCARD",
    "Settings",
    "clear_settings_cache",
    "get_config_dir",
    "get_settings",
]
