"""
UI-related settings for parcel_map.
"""

from typing import Any, Union

from PySide6.QtCore import QByteArray
from PySide6.QtWidgets import QMainWindow, QWidget

from .base import SettingsSection


class UISettings(SettingsSection):
    """Manages window geometry."""

    def save_window_geometry(self, widget: Union[QWidget, QMainWindow]) -> None:
        """Save window geometry and state."""
        self.settings.setValue("ui/window_geometry", widget.saveGeometry())
        # Only QMainWindow has saveState
        if isinstance(widget, QMainWindow):
            self.settings.setValue("ui/window_state", widget.saveState())
        self.settings.sync()

    def restore_window_geometry(self, widget: Union[QWidget, QMainWindow]) -> bool:
        """Restore window geometry and state. Returns True if restored."""
        geometry = self._as_bytes(self.settings.value("ui/window_geometry"))
        state = self._as_bytes(self.settings.value("ui/window_state"))

        restored = False
        if geometry is not None:
            restored = bool(widget.restoreGeometry(geometry))
        if state is not None and isinstance(widget, QMainWindow):
            widget.restoreState(state)
        return restored

    @staticmethod
    def _as_bytes(value: Any) -> Union[QByteArray, None]:
        if not value:
            return None
        if isinstance(value, QByteArray):
            return value
        try:
            return QByteArray(bytes(value))
        except (TypeError, ValueError):
            return None
