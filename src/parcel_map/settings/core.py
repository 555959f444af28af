"""
Core settings management for parcel_map.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QMainWindow, QWidget

from .types import ConfigError, ConfigVersion, ValidationResult
from .migration import SettingsMigrator
from .validation import SettingsValidator
from .map import MapSettings
from .logging import LoggingSettings
from .paths import PathSettings
from .ui import UISettings

logger = logging.getLogger(__name__)


class AppSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to application settings with automatic
    cross-platform storage and validation.
    """

    def __init__(self, profile: str = "default", backend: Optional[QSettings] = None):
        """Initialize settings for a profile.

        Args:
            profile: Settings profile name (default: "default")
            backend: QSettings to use instead of the per-user store
                (e.g. an INI file in tests)
        """
        self.settings = backend if backend is not None else QSettings("parcel_map", "parcel_map")
        if self.settings.status() == QSettings.Status.AccessError:
            raise ConfigError(f"Cannot access settings store: {self.settings.fileName()}")
        self.profile = profile

        # Use profile as a group: parcel_map/parcel_map/default/...
        self.settings.beginGroup(profile)

        self._migrator = SettingsMigrator(self.settings)
        self._validator = SettingsValidator(self)
        self._map = MapSettings(self.settings)
        self._logging = LoggingSettings(self.settings)
        self._paths = PathSettings(self.settings)
        self._ui = UISettings(self.settings)

        self._migrator.ensure_version()

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def map(self) -> MapSettings:
        """Access map settings subsystem."""
        return self._map

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    @property
    def paths(self) -> PathSettings:
        """Access path settings subsystem."""
        return self._paths

    @property
    def ui(self) -> UISettings:
        """Access UI settings subsystem."""
        return self._ui

    # === VERSION AND FIRST RUN ===

    @property
    def is_first_run(self) -> bool:
        value = self.settings.value("app/first_run", True)
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value)

    def set_first_run_complete(self) -> None:
        """Mark first run as complete."""
        self.settings.setValue("app/first_run", False)
        self.settings.sync()

    @property
    def version(self) -> str:
        return str(self.settings.value("app/version", ConfigVersion.CURRENT.value))

    # === DELEGATES ===

    def save_window_geometry(self, widget: Union[QWidget, QMainWindow]) -> None:
        self._ui.save_window_geometry(widget)

    def restore_window_geometry(self, widget: Union[QWidget, QMainWindow]) -> bool:
        return self._ui.restore_window_geometry(widget)

    def remember_data_file(self, path: Union[str, Path]) -> None:
        self._paths.last_data_file = path

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    def get_settings_file_path(self) -> str:
        """Get path to the settings storage."""
        return self.settings.fileName()
