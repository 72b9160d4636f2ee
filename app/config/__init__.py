"""
Configuration package for the PackPal backend.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    DatabaseSettings,
    SecuritySettings,
    WeatherSettings,
    GeminiSettings,
    settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "DatabaseSettings",
    "SecuritySettings",
    "WeatherSettings",
    "GeminiSettings",
    "settings",
    "get_settings",
    "reload_settings",
]
