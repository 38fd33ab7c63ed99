"""
Configuration package for the spot map engine.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    DatasetSettings,
    PositioningSettings,
    ViewportSettings,
    TileSettings,
    ContentSettings,
    settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "DatasetSettings",
    "PositioningSettings",
    "ViewportSettings",
    "TileSettings",
    "ContentSettings",
    "settings",
    "get_settings",
    "reload_settings",
]
