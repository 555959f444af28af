"""Event handlers for MapView.

This module provides event handling functionality for MapView,
including mouse panning, wheel zoom, marker clicks and resize events.
"""

from PySide6.QtCore import Qt
from PySide6.QtGui import QMouseEvent, QResizeEvent, QWheelEvent


class MapViewEventHandlers:
    """Mixin class for MapView event handling.

    Handles:
    - Mouse panning (left or middle button drag)
    - Marker clicks (emits markerClicked with the listing id)
    - Wheel zoom, unless disabled in settings
    - Window resize (repositioning overlay UI)
    """

    def resizeEvent(self, event: QResizeEvent) -> None:
        """Handle resize event to keep the camera centred and reposition overlays."""
        super().resizeEvent(event)  # type: ignore

        margin = 12
        controls = self.zoom_controls  # type: ignore
        controls.move(margin, self.height() - controls.height() - margin)  # type: ignore
        self._apply_camera()  # type: ignore

    def mousePressEvent(self, event: QMouseEvent) -> None:
        """Select markers on click, start panning otherwise."""
        if event.button() in (Qt.MouseButton.LeftButton, Qt.MouseButton.MiddleButton):
            property_id = self.property_id_at(event.position().toPoint())  # type: ignore
            if property_id is not None and event.button() == Qt.MouseButton.LeftButton:
                self.markerClicked.emit(property_id)  # type: ignore
                event.accept()
                return

            self._is_panning = True  # type: ignore
            self._pan_last = event.position()  # type: ignore
            self.setCursor(Qt.CursorShape.ClosedHandCursor)  # type: ignore
            event.accept()
        else:
            super().mousePressEvent(event)  # type: ignore

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        """Pan the camera by the mouse delta."""
        if self._is_panning:  # type: ignore
            delta = event.position() - self._pan_last  # type: ignore
            self._pan_last = event.position()  # type: ignore
            self.pan_by(delta.x(), delta.y())  # type: ignore
            event.accept()
        else:
            super().mouseMoveEvent(event)  # type: ignore

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        """Stop panning."""
        if self._is_panning:  # type: ignore
            self._is_panning = False  # type: ignore
            self.unsetCursor()  # type: ignore
            event.accept()
        else:
            super().mouseReleaseEvent(event)  # type: ignore

    def wheelEvent(self, event: QWheelEvent) -> None:
        """Zoom one level per wheel notch when scroll zoom is enabled."""
        if not self.scroll_zoom_enabled:  # type: ignore
            event.ignore()
            return

        steps = event.angleDelta().y() / 120
        if steps:
            self.set_zoom(self.zoom + (1 if steps > 0 else -1))  # type: ignore
        event.accept()
