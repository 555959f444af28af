"""
Data models for property listings.

Lightweight dataclasses only: no file-system or service logic.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class OperationType(str, Enum):
    RENT = "RENT"
    SALE = "SALE"


class PropertyType(str, Enum):
    HOUSE = "HOUSE"
    APARTMENT = "APARTMENT"
    LAND = "LAND"
    COMMERCIAL_PROPERTY = "COMMERCIAL_PROPERTY"
    OFFICE = "OFFICE"


# Record keys as written by the web frontend -> dataclass field names
_CAMEL_KEYS = {
    "operationType": "operation_type",
    "propertyType": "property_type",
    "type": "property_type",
}


@dataclass(frozen=True)
class MapBounds:
    """Inclusive latitude/longitude box."""

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def contains(self, lat: float, lon: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lon <= lon <= self.max_lon


@dataclass
class PropertyRecord:
    """A single property listing.

    Coordinates are optional: listings without a geocoded position are
    shown in lists but never on the map.
    """

    id: str
    title: str
    price: float = 0.0
    currency: str = "USD"
    operation_type: OperationType = OperationType.SALE
    property_type: PropertyType = PropertyType.HOUSE
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None
    city: Optional[str] = None
    rooms: Optional[int] = None
    bathrooms: Optional[int] = None
    area: Optional[float] = None
    status: str = "AVAILABLE"

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PropertyRecord":
        """Create PropertyRecord from a JSON dict.

        Accepts camelCase or snake_case keys.

        Args:
            data: Raw JSON object

        Returns:
            PropertyRecord instance

        Raises:
            KeyError: if ``id`` is missing
            ValueError: if a numeric or enum field cannot be converted
        """
        data = {_CAMEL_KEYS.get(k, k): v for k, v in data.items()}

        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            price=float(data.get("price") or 0.0),
            currency=str(data.get("currency") or "USD"),
            operation_type=OperationType(data.get("operation_type") or "SALE"),
            property_type=PropertyType(data.get("property_type") or "HOUSE"),
            latitude=_optional_float(data.get("latitude")),
            longitude=_optional_float(data.get("longitude")),
            address=data.get("address"),
            city=data.get("city"),
            rooms=_optional_int(data.get("rooms")),
            bathrooms=_optional_int(data.get("bathrooms")),
            area=_optional_float(data.get("area")),
            status=str(data.get("status") or "AVAILABLE"),
        )


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)
