"""Widget tests for MapView and MainWindow (offscreen platform)."""

import pytest
from PySide6.QtCore import Qt
from PySide6.QtTest import QTest

from parcel_map.gui.main_window import MainWindow
from parcel_map.gui.map_view import MapView
from parcel_map.properties import OperationType, PropertyDataService
from parcel_map.sync import FocusPoint


@pytest.fixture
def fast_settings(app_settings):
    app_settings.map.fly_to_delay_ms = 10
    app_settings.map.relayout_delay_ms = 10
    app_settings.map.fly_to_duration = 0.0
    return app_settings


@pytest.fixture
def map_view(fast_settings, qapp):
    view = MapView(fast_settings)
    view.resize(800, 600)
    yield view
    view.close()
    view.deleteLater()


class TestMapView:
    """MapView as a rendering surface."""

    def test_not_ready_until_shown(self, map_view) -> None:
        assert not map_view.surface.get_container_ready()
        map_view.show()
        assert map_view.surface.get_container_ready()

    def test_show_attaches_sync_components(self, map_view) -> None:
        map_view.show()
        assert map_view.sync_controller.is_attached
        assert map_view.readiness_guard.is_pending

        QTest.qWait(50)
        assert not map_view.readiness_guard.is_pending

    def test_hide_detaches(self, map_view) -> None:
        map_view.show()
        map_view.focus_on(FocusPoint(-34.6, -58.4))
        map_view.hide()

        assert not map_view.sync_controller.is_attached
        assert not map_view.readiness_guard.is_pending

    def test_focus_recenters_view(self, map_view) -> None:
        map_view.show()
        target = FocusPoint(-34.5880, -58.4300)
        map_view.focus_on(target)
        QTest.qWait(100)

        assert map_view.center == target
        assert map_view.zoom == 17
        assert map_view.sync_controller.last_applied_focus == target

    def test_fly_to_hidden_view_raises(self, map_view) -> None:
        with pytest.raises(RuntimeError):
            map_view.surface.animate_to(FocusPoint(0.0, 0.0), 17, 0.0)

    def test_zoom_is_clamped(self, map_view) -> None:
        map_view.set_zoom(30)
        assert map_view.zoom == 18
        map_view.zoom_out()
        map_view.zoom_out()
        map_view.zoom_out()
        map_view.zoom_out()
        map_view.zoom_out()
        assert map_view.zoom == 14

    def test_bounds_signal_on_camera_change(self, map_view) -> None:
        received = []
        map_view.show()
        map_view.boundsChanged.connect(received.append)
        map_view.set_view(FocusPoint(-34.6, -58.4), 16)

        assert received
        assert received[-1].contains(-34.6, -58.4)

    def test_animated_fly_to_lands_on_target(self, map_view) -> None:
        map_view.show()
        target = FocusPoint(-34.5620, -58.4560)
        map_view.fly_to(target, 16, 0.05)
        QTest.qWait(200)

        assert map_view.center.latitude == pytest.approx(target.latitude)
        assert map_view.center.longitude == pytest.approx(target.longitude)
        assert map_view.zoom == 16


class TestMainWindow:
    """Selection flows from the sidebar to the map."""

    def test_selecting_listing_flies_map(self, fast_settings, listings_file, qapp) -> None:
        service = PropertyDataService.load_json(listings_file)
        window = MainWindow(fast_settings, service)
        window.show()
        try:
            window.select_property("p2")
            QTest.qWait(100)

            assert window.map_view.center == FocusPoint(-34.5620, -58.4560)
            assert window.sidebar.current_property_id() == "p2"
        finally:
            window.close()
            window.deleteLater()

    def test_listing_without_location_does_not_move(self, fast_settings, listings_file, qapp) -> None:
        service = PropertyDataService.load_json(listings_file)
        window = MainWindow(fast_settings, service)
        window.show()
        try:
            before = window.map_view.center
            window.select_property("p4")
            QTest.qWait(100)
            assert window.map_view.center == before
        finally:
            window.close()
            window.deleteLater()

    def test_load_listings_failure_keeps_catalogue(self, fast_settings, tmp_path, qapp, monkeypatch) -> None:
        from PySide6.QtWidgets import QMessageBox

        monkeypatch.setattr(QMessageBox, "warning", lambda *args, **kwargs: None)
        window = MainWindow(fast_settings)
        try:
            assert not window.load_listings(tmp_path / "missing.json")
            assert window.service.all() == []
        finally:
            window.close()
            window.deleteLater()

    def test_sidebar_filters_narrow_listings_in_view(self, fast_settings, listings_file, qapp) -> None:
        service = PropertyDataService.load_json(listings_file)
        window = MainWindow(fast_settings, service)
        window.show()
        try:
            window.map_view.set_view(FocusPoint(-34.5880, -58.4300), 16)
            assert window.sidebar.list_widget.count() == 1

            window.sidebar.operation_combo.setCurrentIndex(
                window.sidebar.operation_combo.findData(OperationType.RENT.value)
            )
            assert window.filters.operation_type == OperationType.RENT
            assert window.sidebar.list_widget.count() == 0

            window.sidebar.operation_combo.setCurrentIndex(
                window.sidebar.operation_combo.findData(OperationType.SALE.value)
            )
            window.sidebar.rooms_spin.setValue(3)
            assert window.filters.min_rooms == 3
            assert window.sidebar.list_widget.count() == 0
        finally:
            window.close()
            window.deleteLater()

    def test_featured_button_lists_most_expensive(self, fast_settings, listings_file, qapp) -> None:
        service = PropertyDataService.load_json(listings_file)
        window = MainWindow(fast_settings, service)
        window.show()
        try:
            window.map_view.set_view(FocusPoint(-34.5880, -58.4300), 16)
            window.sidebar.featured_button.setChecked(True)

            first = window.sidebar.list_widget.item(0)
            assert first.data(Qt.ItemDataRole.UserRole) == "p2"
            assert "featured" in window.sidebar.header_label.text()

            window.sidebar.featured_button.setChecked(False)
            assert window.sidebar.list_widget.count() == 1
            assert "in view" in window.sidebar.header_label.text()
        finally:
            window.close()
            window.deleteLater()
