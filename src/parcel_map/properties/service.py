"""
Property data service.

In-memory catalogue of listings with the queries the map view needs:
lookup by id, listings inside the visible bounds and a featured subset.
It also remembers the current selection, which is where the map's focus
point comes from.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from ..sync.focus import FocusPoint
from .loaders import PropertyFileLoader
from .models import MapBounds, OperationType, PropertyRecord, PropertyType


@dataclass
class PropertyFilters:
    """Optional narrowing for bounds queries. None means "any"."""

    operation_type: Optional[OperationType] = None
    property_type: Optional[PropertyType] = None
    min_rooms: Optional[int] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None

    def matches(self, record: PropertyRecord) -> bool:
        if self.operation_type and record.operation_type != self.operation_type:
            return False
        if self.property_type and record.property_type != self.property_type:
            return False
        if self.min_rooms is not None and (record.rooms or 0) < self.min_rooms:
            return False
        if self.min_price is not None and record.price < self.min_price:
            return False
        if self.max_price is not None and record.price > self.max_price:
            return False
        return True


class PropertyDataService:
    """Service for querying property listings."""

    def __init__(self, records: Optional[Iterable[PropertyRecord]] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._records: Dict[str, PropertyRecord] = {}
        self._selected_id: Optional[str] = None

        if records is not None:
            self.replace(records)

    @classmethod
    def load_json(cls, path: Union[str, Path]) -> "PropertyDataService":
        """Create a service from a listings file.

        Raises:
            DataLoadError: if the file cannot be read
        """
        return cls(PropertyFileLoader().load(path))

    def replace(self, records: Iterable[PropertyRecord]) -> None:
        """Replace the catalogue. Clears the selection if it disappears."""
        self._records = {}
        for record in records:
            if record.id in self._records:
                self.logger.warning(f"Duplicate listing id {record.id}, keeping last")
            self._records[record.id] = record

        if self._selected_id not in self._records:
            self._selected_id = None
        self.logger.debug(f"Catalogue holds {len(self._records)} listings")

    # === QUERIES ===

    def all(self) -> List[PropertyRecord]:
        return list(self._records.values())

    def get(self, property_id: str) -> Optional[PropertyRecord]:
        return self._records.get(property_id)

    def in_bounds(
        self, bounds: MapBounds, filters: Optional[PropertyFilters] = None
    ) -> List[PropertyRecord]:
        """Available listings located inside ``bounds``.

        Args:
            bounds: Visible map area
            filters: Optional extra filters

        Returns:
            Matching records in catalogue order
        """
        result: List[PropertyRecord] = []
        for record in self._records.values():
            if record.status != "AVAILABLE" or not record.has_location:
                continue
            if not bounds.contains(record.latitude, record.longitude):  # type: ignore[arg-type]
                continue
            if filters is not None and not filters.matches(record):
                continue
            result.append(record)
        return result

    def featured(self, limit: int = 4) -> List[PropertyRecord]:
        """Most expensive available listings first."""
        available = [r for r in self._records.values() if r.status == "AVAILABLE"]
        available.sort(key=lambda r: r.price, reverse=True)
        return available[: max(0, limit)]

    # === SELECTION ===

    @property
    def selected(self) -> Optional[PropertyRecord]:
        if self._selected_id is None:
            return None
        return self._records.get(self._selected_id)

    def select(self, property_id: Optional[str]) -> Optional[FocusPoint]:
        """Select a listing and return the point the map should focus on.

        Args:
            property_id: Listing id, or None to clear the selection

        Returns:
            FocusPoint of the selected listing, or None when it is unknown or
            has no coordinates
        """
        if property_id is None or property_id not in self._records:
            if property_id is not None:
                self.logger.warning(f"Unknown listing id: {property_id}")
            self._selected_id = None
            return None

        self._selected_id = property_id
        return FocusPoint.from_record(self._records[property_id])
