"""
Configuration package for the Heritage Map Backend.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    DatabaseSettings,
    RedisSettings,
    TourSettings,
    SecuritySettings,
    settings,
    build_settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "DatabaseSettings",
    "RedisSettings",
    "TourSettings",
    "SecuritySettings",
    "settings",
    "build_settings",
    "get_settings",
    "reload_settings",
]
