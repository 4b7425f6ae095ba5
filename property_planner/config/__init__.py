"""Configuration package."""

from property_planner.config.settings import (
    AppSettings,
    PersistenceSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "PersistenceSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
