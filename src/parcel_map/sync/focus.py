"""
Focus point value type.

A FocusPoint is the geographic centre the map view should display.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class FocusPoint:
    """Immutable latitude/longitude pair.

    Equality is exact numeric equality of both fields, so two points built
    from the same record always compare equal.
    """

    latitude: float
    longitude: float

    @classmethod
    def from_record(cls, record: Any) -> Optional["FocusPoint"]:
        """Build a focus point from anything carrying optional coordinates.

        Accepts objects with ``latitude``/``longitude`` attributes or dicts
        with the same keys (``lat``/``lon`` are accepted as well).

        Args:
            record: Property record, dict or None

        Returns:
            FocusPoint, or None when either coordinate is missing
        """
        if record is None:
            return None

        if isinstance(record, dict):
            lat = record.get("latitude", record.get("lat"))
            lon = record.get("longitude", record.get("lon"))
        else:
            lat = getattr(record, "latitude", None)
            lon = getattr(record, "longitude", None)

        if lat is None or lon is None:
            return None
        return cls(float(lat), float(lon))

    def as_tuple(self) -> tuple[float, float]:
        """Return (latitude, longitude)."""
        return (self.latitude, self.longitude)

    def __str__(self) -> str:
        return f"({self.latitude:.6f}, {self.longitude:.6f})"
