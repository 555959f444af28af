"""
Settings package for parcel_map.

This package provides a modular, type-safe configuration management system
using Qt's QSettings for cross-platform storage.

Usage:
    from parcel_map.settings import AppSettings

    settings = AppSettings()
    result = settings.validate()
    config = settings.map.sync_config()
"""

from .core import AppSettings
from .types import ConfigVersion, ConfigError, ValidationResult
from .map import MapSettings
from .logging import LoggingSettings

__all__ = [
    "AppSettings",
    "ConfigVersion",
    "ConfigError",
    "ValidationResult",
    "MapSettings",
    "LoggingSettings",
]
