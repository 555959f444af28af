"""Main view widget for the property map.

MapView draws listing markers over a Web Mercator tile grid and implements
the rendering surface the view synchronization components drive.
"""

import logging
import math
from typing import Dict, Iterable, Optional

import qtawesome as qta  # type: ignore
from PySide6.QtCore import QEasingCurve, QPoint, QPointF, Qt, QVariantAnimation, Signal
from PySide6.QtGui import QBrush, QCloseEvent, QColor, QHideEvent, QPainter, QPen, QShowEvent, QTransform
from PySide6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsScene,
    QGraphicsView,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from parcel_map.properties.models import MapBounds, PropertyRecord
from parcel_map.settings import AppSettings
from parcel_map.sync import (
    FocusPoint,
    QtScheduler,
    RenderingSurface,
    SurfaceReadinessGuard,
    ViewSyncController,
)

from .events import MapViewEventHandlers
from .projection import MercatorProjection

BASE_LAYER_COLORS = {
    "cartoLight": ("#f2efe9", "#dcd7cd"),
    "cartoDark": ("#262a2e", "#3a3f44"),
    "osm": ("#e8e4d8", "#cfc9b8"),
    "satellite": ("#2f3b2a", "#44523d"),
}

MARKER_RADIUS = 6
# QGraphicsItem data slot holding the listing id
MARKER_ID_KEY = 0


class MapViewSurface(RenderingSurface):
    """RenderingSurface adapter around a MapView.

    Qt widgets cannot also derive from an ABC, so the view hands this
    adapter to the sync components.
    """

    def __init__(self, view: "MapView"):
        self.view = view

    def get_container_ready(self) -> bool:
        return self.view.is_container_ready()

    def animate_to(self, focus: FocusPoint, zoom: int, duration_seconds: float) -> None:
        self.view.fly_to(focus, zoom, duration_seconds)

    def force_relayout(self) -> None:
        self.view.invalidate_size()


class MapView(MapViewEventHandlers, QGraphicsView):
    """Graphics view for rendering property markers on a map.

    Scene coordinates are world pixels at zoom 0; the current zoom is a
    view transform. Markers ignore the transform so they keep a constant
    on-screen size.
    """

    boundsChanged = Signal(object)  # MapBounds
    markerClicked = Signal(str)

    def __init__(self, settings: AppSettings, parent: Optional[QWidget] = None):
        """Initialize the map view.

        Args:
            settings: Application settings (camera limits, fly-to timing)
            parent: Parent widget
        """
        super().__init__(parent)

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.settings = settings
        self.projection = MercatorProjection()

        world = self.projection.world_size(0)
        self._scene = QGraphicsScene(0, 0, world, world, self)
        self.setScene(self._scene)

        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.NoAnchor)
        self.setResizeAnchor(QGraphicsView.ViewportAnchor.NoAnchor)
        self.setViewportUpdateMode(QGraphicsView.ViewportUpdateMode.FullViewportUpdate)

        map_settings = settings.map
        self.min_zoom = map_settings.min_zoom
        self.max_zoom = map_settings.max_zoom
        self.scroll_zoom_enabled = map_settings.scroll_zoom_enabled
        self._base_layer = map_settings.base_layer

        self._center: FocusPoint = map_settings.default_center
        self._zoom: float = float(self.clamp_zoom(map_settings.initial_zoom))

        self._is_panning = False
        self._pan_last = QPointF()

        self._markers: Dict[str, QGraphicsEllipseItem] = {}
        self._selected_id: Optional[str] = None
        self._animation: Optional[QVariantAnimation] = None

        self._setup_zoom_controls()

        # View synchronization
        sync_config = map_settings.sync_config()
        scheduler = QtScheduler(self)
        self.surface = MapViewSurface(self)
        self.sync_controller = ViewSyncController(scheduler, sync_config)
        self.readiness_guard = SurfaceReadinessGuard(scheduler, sync_config.relayout_delay_ms)

        self.logger.debug("Map view initialized")

    def _setup_zoom_controls(self) -> None:
        """Setup overlay zoom buttons in the bottom-left corner."""
        self.zoom_controls = QWidget(self)
        layout = QVBoxLayout(self.zoom_controls)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)
        layout.setSizeConstraint(QVBoxLayout.SizeConstraint.SetFixedSize)

        self.zoom_in_button = QPushButton("", self.zoom_controls)
        self.zoom_in_button.setIcon(qta.icon("mdi.plus"))  # type: ignore[arg-type]
        self.zoom_in_button.setToolTip("Zoom in")
        self.zoom_in_button.clicked.connect(self.zoom_in)

        self.zoom_out_button = QPushButton("", self.zoom_controls)
        self.zoom_out_button.setIcon(qta.icon("mdi.minus"))  # type: ignore[arg-type]
        self.zoom_out_button.setToolTip("Zoom out")
        self.zoom_out_button.clicked.connect(self.zoom_out)

        for button in (self.zoom_in_button, self.zoom_out_button):
            button.setFixedSize(40, 40)
            button.setProperty("class", "map-overlay-button")
            layout.addWidget(button)

        self.zoom_controls.raise_()

    # === LIFECYCLE ===

    def showEvent(self, event: QShowEvent) -> None:
        """Attach the sync components once the view is on screen."""
        super().showEvent(event)
        self.sync_controller.attach(self.surface)
        self.readiness_guard.on_attach(self.surface)

    def hideEvent(self, event: QHideEvent) -> None:
        """Detach before the view goes away so no timer touches it."""
        self.detach_sync()
        super().hideEvent(event)

    def closeEvent(self, event: QCloseEvent) -> None:
        self.detach_sync()
        super().closeEvent(event)

    def detach_sync(self) -> None:
        self.readiness_guard.on_detach()
        self.sync_controller.detach()
        self._stop_animation()

    # === CAMERA ===

    @property
    def center(self) -> FocusPoint:
        return self._center

    @property
    def zoom(self) -> float:
        return self._zoom

    def clamp_zoom(self, zoom: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, zoom))

    def set_view(self, center: FocusPoint, zoom: Optional[float] = None) -> None:
        """Jump to ``center`` without animation."""
        self._center = center
        if zoom is not None:
            self._zoom = self.clamp_zoom(zoom)
        self._apply_camera()

    def set_zoom(self, zoom: float) -> None:
        self.set_view(self._center, zoom)

    def zoom_in(self) -> None:
        self.set_zoom(math.floor(self._zoom) + 1)

    def zoom_out(self) -> None:
        self.set_zoom(math.ceil(self._zoom) - 1)

    def pan_by(self, dx: float, dy: float) -> None:
        """Move the camera by a screen-pixel delta (drag direction)."""
        x, y = self.projection.focus_to_pixels(self._center, self._zoom)
        lat, lon = self.projection.to_lat_lon(x - dx, y - dy, self._zoom)
        self.set_view(FocusPoint(lat, lon))

    def focus_on(self, focus: Optional[FocusPoint]) -> None:
        """Ask the sync controller to fly to ``focus``."""
        self.sync_controller.on_focus_changed(focus)

    def visible_bounds(self) -> MapBounds:
        viewport = self.viewport()
        return self.projection.bounds_for_view(
            self._center, self._zoom, viewport.width(), viewport.height()
        )

    def _apply_camera(self) -> None:
        scale = 2.0 ** self._zoom
        self.setTransform(QTransform.fromScale(scale, scale))
        x, y = self.projection.focus_to_pixels(self._center, 0)
        self.centerOn(x, y)
        # Listeners only care about where the camera settles
        if self._animation is None:
            self.boundsChanged.emit(self.visible_bounds())

    # === RENDERING SURFACE ===

    def is_container_ready(self) -> bool:
        viewport = self.viewport()
        return self.isVisible() and viewport.width() > 0 and viewport.height() > 0

    def fly_to(self, focus: FocusPoint, zoom: float, duration_seconds: float) -> None:
        """Animate the camera to ``focus`` at ``zoom``.

        Raises:
            RuntimeError: if the view is no longer visible
        """
        if not self.isVisible():
            raise RuntimeError("Map view is not visible")

        target_zoom = self.clamp_zoom(zoom)
        self._stop_animation()

        if duration_seconds <= 0:
            self.set_view(focus, target_zoom)
            return

        start_center, start_zoom = self._center, self._zoom
        sx, sy = self.projection.focus_to_pixels(start_center, 0)
        tx, ty = self.projection.focus_to_pixels(focus, 0)

        def _step(value: object) -> None:
            t = float(value)  # type: ignore[arg-type]
            lat, lon = self.projection.to_lat_lon(sx + (tx - sx) * t, sy + (ty - sy) * t, 0)
            self.set_view(FocusPoint(lat, lon), start_zoom + (target_zoom - start_zoom) * t)

        animation = QVariantAnimation(self)
        animation.setStartValue(0.0)
        animation.setEndValue(1.0)
        animation.setDuration(int(duration_seconds * 1000))
        animation.setEasingCurve(QEasingCurve.Type.InOutCubic)
        animation.valueChanged.connect(_step)
        animation.finished.connect(lambda: self._finish_flight(focus, target_zoom))
        self._animation = animation
        animation.start()
        self.logger.debug(f"Flying to {focus} at zoom {target_zoom} over {duration_seconds}s")

    def _finish_flight(self, focus: FocusPoint, zoom: float) -> None:
        self._stop_animation()
        self.set_view(focus, zoom)

    def _stop_animation(self) -> None:
        animation, self._animation = self._animation, None
        if animation is not None:
            animation.stop()
            animation.deleteLater()

    def invalidate_size(self) -> None:
        """Recompute geometry and redraw at the current camera."""
        self.updateGeometry()
        self._apply_camera()
        self.viewport().update()

    # === MARKERS ===

    def set_properties(self, records: Iterable[PropertyRecord]) -> None:
        """Replace the markers with one per located listing."""
        for item in self._markers.values():
            self._scene.removeItem(item)
        self._markers.clear()

        for record in records:
            if not record.has_location:
                continue
            x, y = self.projection.to_pixels(record.latitude, record.longitude, 0)  # type: ignore[arg-type]
            item = QGraphicsEllipseItem(
                -MARKER_RADIUS, -MARKER_RADIUS, 2 * MARKER_RADIUS, 2 * MARKER_RADIUS
            )
            item.setPos(x, y)
            item.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIgnoresTransformations)
            item.setData(MARKER_ID_KEY, record.id)
            item.setToolTip(record.title)
            self._scene.addItem(item)
            self._markers[record.id] = item

        self._style_markers()

    def set_selected(self, property_id: Optional[str]) -> None:
        self._selected_id = property_id
        self._style_markers()

    def property_id_at(self, pos: QPoint) -> Optional[str]:
        """Listing id of the marker under a viewport position, if any."""
        for item in self.items(pos):
            value = item.data(MARKER_ID_KEY)
            if value is not None:
                return str(value)
        return None

    def _style_markers(self) -> None:
        for property_id, item in self._markers.items():
            selected = property_id == self._selected_id
            item.setBrush(QBrush(QColor("#e4572e" if selected else "#2e86ab")))
            item.setPen(QPen(QColor("white"), 2))
            item.setZValue(1 if selected else 0)

    def drawBackground(self, painter: QPainter, rect) -> None:
        """Fill the base layer colour and draw tile boundaries."""
        fill, line = BASE_LAYER_COLORS.get(self._base_layer, BASE_LAYER_COLORS["cartoLight"])
        painter.fillRect(rect, QColor(fill))

        tile = self.projection.world_size(0) / (2 ** math.floor(self._zoom))
        first_col = math.floor(rect.left() / tile)
        first_row = math.floor(rect.top() / tile)
        cols = math.ceil(rect.width() / tile) + 1
        rows = math.ceil(rect.height() / tile) + 1
        if cols * rows > 4096:
            return

        pen = QPen(QColor(line))
        pen.setCosmetic(True)
        painter.setPen(pen)
        for col in range(first_col, first_col + cols + 1):
            x = col * tile
            painter.drawLine(QPointF(x, rect.top()), QPointF(x, rect.bottom()))
        for row in range(first_row, first_row + rows + 1):
            y = row * tile
            painter.drawLine(QPointF(rect.left(), y), QPointF(rect.right(), y))
