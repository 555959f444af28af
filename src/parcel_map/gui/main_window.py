"""
Main application window for parcel_map.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QCloseEvent, QKeySequence
from PySide6.QtWidgets import QDockWidget, QFileDialog, QMainWindow, QMessageBox, QWidget

from ..properties import DataLoadError, MapBounds, PropertyDataService, PropertyFilters
from ..settings import AppSettings
from .map_view import MapView
from .properties_sidebar import PropertiesSidebar


class MainWindow(QMainWindow):
    """Property list next to the interactive map.

    Selecting a listing (in the sidebar or on the map) feeds its focus
    point to the map's sync controller; moving the map refilters the list.
    """

    def __init__(
        self,
        settings: AppSettings,
        service: Optional[PropertyDataService] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.setObjectName("main_window")
        self.settings = settings
        self.service = service or PropertyDataService()
        self.filters = PropertyFilters()
        self.show_featured = False

        self.map_view = MapView(settings, self)
        self.setCentralWidget(self.map_view)

        self.sidebar = PropertiesSidebar(self)
        self.sidebar_dock = QDockWidget("Listings", self)
        self.sidebar_dock.setObjectName("listings_dock")
        self.sidebar_dock.setWidget(self.sidebar)
        self.addDockWidget(Qt.DockWidgetArea.LeftDockWidgetArea, self.sidebar_dock)

        self._setup_menus()
        self.status_bar = self.statusBar()

        self.map_view.boundsChanged.connect(self.on_bounds_changed)
        self.map_view.markerClicked.connect(self.select_property)
        self.sidebar.propertySelected.connect(self.select_property)
        self.sidebar.filtersChanged.connect(self.set_filters)
        self.sidebar.featuredToggled.connect(self.set_show_featured)

        if not self.settings.restore_window_geometry(self):
            self.resize(1200, 800)
        self.setWindowTitle("Parcel Map")

        self.refresh_properties()
        self.logger.info("Main window initialized")

    def _setup_menus(self) -> None:
        file_menu = self.menuBar().addMenu("&File")

        self.action_open = QAction("&Open listings...", self)
        self.action_open.setShortcut(QKeySequence.StandardKey.Open)
        self.action_open.triggered.connect(self.open_listings_dialog)
        file_menu.addAction(self.action_open)

        file_menu.addSeparator()
        self.action_exit = QAction("E&xit", self)
        self.action_exit.setShortcut(QKeySequence.StandardKey.Quit)
        self.action_exit.triggered.connect(self.close)
        file_menu.addAction(self.action_exit)

        view_menu = self.menuBar().addMenu("&View")

        self.action_scroll_zoom = QAction("Scroll wheel zoom", self)
        self.action_scroll_zoom.setCheckable(True)
        self.action_scroll_zoom.setChecked(self.settings.map.scroll_zoom_enabled)
        self.action_scroll_zoom.toggled.connect(self.set_scroll_zoom_enabled)
        view_menu.addAction(self.action_scroll_zoom)
        view_menu.addAction(self.sidebar_dock.toggleViewAction())

    # === DATA ===

    def open_listings_dialog(self) -> None:
        last = self.settings.paths.last_data_file
        path, _ = QFileDialog.getOpenFileName(
            self, "Open listings", str(last.parent) if last else "", "JSON files (*.json)"
        )
        if path:
            self.load_listings(path)

    def load_listings(self, path: Union[str, Path]) -> bool:
        """Load a listings file, replacing the current catalogue.

        Returns:
            True on success; errors are reported to the user and logged
        """
        try:
            service = PropertyDataService.load_json(path)
        except DataLoadError as e:
            self.logger.error(f"Failed to load listings: {e}")
            self.status_bar.showMessage(f"Failed to load listings: {e}", 10000)
            QMessageBox.warning(self, "Listings not loaded", str(e))
            return False

        self.service = service
        self.settings.remember_data_file(path)
        self.refresh_properties()
        self.status_bar.showMessage(f"Loaded {len(service.all())} listings", 5000)
        return True

    def refresh_properties(self) -> None:
        self.map_view.set_properties(self.service.all())
        self.map_view.set_selected(None)
        self.sidebar.set_current(None)
        self.on_bounds_changed(self.map_view.visible_bounds())

    def on_bounds_changed(self, bounds: MapBounds) -> None:
        limit = self.settings.map.properties_limit
        if self.show_featured:
            self.sidebar.set_properties(self.service.featured(limit), limit, featured=True)
            return
        records = self.service.in_bounds(bounds, self.filters)
        self.sidebar.set_properties(records, limit)

    def set_filters(self, filters: PropertyFilters) -> None:
        self.filters = filters
        self.on_bounds_changed(self.map_view.visible_bounds())

    def set_show_featured(self, enabled: bool) -> None:
        """Switch the sidebar between featured listings and listings in view."""
        self.show_featured = enabled
        self.on_bounds_changed(self.map_view.visible_bounds())

    # === SELECTION ===

    def select_property(self, property_id: str) -> None:
        """Select a listing and fly the map to it."""
        focus = self.service.select(property_id)
        self.map_view.set_selected(property_id)
        self.sidebar.set_current(property_id)

        if focus is None:
            self.status_bar.showMessage("Selected listing has no location", 5000)
            return

        record = self.service.selected
        if record is not None:
            self.status_bar.showMessage(record.title or record.id, 5000)
        self.map_view.focus_on(focus)

    def set_scroll_zoom_enabled(self, enabled: bool) -> None:
        self.settings.map.scroll_zoom_enabled = enabled
        self.map_view.scroll_zoom_enabled = enabled

    def closeEvent(self, event: QCloseEvent) -> None:
        """Save geometry and stop map timers before the window goes away."""
        self.map_view.detach_sync()
        self.settings.save_window_geometry(self)
        self.logger.info("Window geometry saved")
        super().closeEvent(event)
