"""Tests for listing models, loading and the data service."""

import logging

import pytest

from parcel_map.properties import (
    DataLoadError,
    MapBounds,
    OperationType,
    PropertyDataService,
    PropertyFilters,
    PropertyRecord,
    PropertyType,
)
from parcel_map.sync import FocusPoint

CITY_BOUNDS = MapBounds(min_lat=-34.7, max_lat=-34.5, min_lon=-58.5, max_lon=-58.3)


class TestFocusPoint:
    """FocusPoint construction and equality."""

    def test_equality_is_exact(self) -> None:
        assert FocusPoint(10.0, 20.0) == FocusPoint(10.0, 20.0)
        assert FocusPoint(10.0, 20.0) != FocusPoint(10.0, 20.000001)

    def test_immutable(self) -> None:
        point = FocusPoint(1.0, 2.0)
        with pytest.raises(AttributeError):
            point.latitude = 3.0  # type: ignore[misc]

    def test_from_record_and_dict(self) -> None:
        record = PropertyRecord(id="a", title="A", latitude=1.5, longitude=2.5)
        assert FocusPoint.from_record(record) == FocusPoint(1.5, 2.5)
        assert FocusPoint.from_record({"lat": 1, "lon": 2}) == FocusPoint(1.0, 2.0)

    def test_from_record_without_location(self) -> None:
        assert FocusPoint.from_record(PropertyRecord(id="a", title="A")) is None
        assert FocusPoint.from_record({"latitude": 1.0}) is None
        assert FocusPoint.from_record(None) is None


class TestPropertyRecord:
    """Record parsing from JSON dicts."""

    def test_camel_case_keys(self) -> None:
        record = PropertyRecord.from_dict(
            {"id": 7, "title": "X", "operationType": "RENT", "type": "OFFICE"}
        )
        assert record.id == "7"
        assert record.operation_type is OperationType.RENT
        assert record.property_type is PropertyType.OFFICE
        assert not record.has_location

    def test_invalid_enum_raises(self) -> None:
        with pytest.raises(ValueError):
            PropertyRecord.from_dict({"id": "x", "operationType": "SWAP"})

    def test_bounds_are_inclusive(self) -> None:
        bounds = MapBounds(0.0, 1.0, 0.0, 1.0)
        assert bounds.contains(0.0, 1.0)
        assert not bounds.contains(1.1, 0.5)


class TestLoading:
    """JSON loading with orjson."""

    def test_load_skips_invalid_entries(self, listings_file, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="parcel_map"):
            service = PropertyDataService.load_json(listings_file)

        assert [r.id for r in service.all()] == ["p1", "p2", "p3", "p4", "p5"]
        assert sum(1 for r in caplog.records if "Skipping invalid listing" in r.getMessage()) == 2

    def test_wrapped_object_format(self, tmp_path) -> None:
        path = tmp_path / "wrapped.json"
        path.write_text('{"properties": [{"id": "a", "title": "A"}]}', encoding="utf-8")
        assert [r.id for r in PropertyDataService.load_json(path).all()] == ["a"]

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(DataLoadError):
            PropertyDataService.load_json(tmp_path / "nope.json")

    def test_unreadable_path(self, tmp_path) -> None:
        with pytest.raises(DataLoadError):
            PropertyDataService.load_json(tmp_path)

    def test_malformed_json(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(DataLoadError):
            PropertyDataService.load_json(path)

    def test_wrong_top_level_type(self, tmp_path) -> None:
        path = tmp_path / "scalar.json"
        path.write_text("42", encoding="utf-8")
        with pytest.raises(DataLoadError):
            PropertyDataService.load_json(path)


class TestPropertyDataService:
    """Queries and selection."""

    @pytest.fixture
    def service(self, listings_file) -> PropertyDataService:
        return PropertyDataService.load_json(listings_file)

    def test_in_bounds_keeps_available_located_listings(self, service) -> None:
        ids = [r.id for r in service.in_bounds(CITY_BOUNDS)]
        assert ids == ["p1", "p2", "p3"]

    def test_in_bounds_with_filters(self, service) -> None:
        sale = PropertyFilters(operation_type=OperationType.SALE)
        assert [r.id for r in service.in_bounds(CITY_BOUNDS, sale)] == ["p1", "p2"]

        big = PropertyFilters(min_rooms=3)
        assert [r.id for r in service.in_bounds(CITY_BOUNDS, big)] == ["p2"]

        cheap = PropertyFilters(max_price=300000, min_price=2000)
        assert [r.id for r in service.in_bounds(CITY_BOUNDS, cheap)] == ["p1"]

    def test_in_bounds_outside_area(self, service) -> None:
        assert service.in_bounds(MapBounds(0.0, 1.0, 0.0, 1.0)) == []

    def test_featured_orders_by_price(self, service) -> None:
        assert [r.id for r in service.featured(limit=2)] == ["p2", "p1"]

    def test_select_returns_focus(self, service) -> None:
        assert service.select("p1") == FocusPoint(-34.5880, -58.4300)
        assert service.selected is not None and service.selected.id == "p1"

    def test_select_without_location(self, service) -> None:
        assert service.select("p4") is None
        assert service.selected is not None and service.selected.id == "p4"

    def test_select_unknown_clears_selection(self, service) -> None:
        service.select("p1")
        assert service.select("missing") is None
        assert service.selected is None

    def test_replace_drops_vanished_selection(self, service) -> None:
        service.select("p1")
        service.replace([PropertyRecord(id="z", title="Z")])
        assert service.selected is None
        assert service.get("z") is not None
