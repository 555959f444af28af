"""
Property listings: models, JSON loading and the query service.
"""

from .models import MapBounds, OperationType, PropertyRecord, PropertyType
from .loaders import DataLoadError, PropertyFileLoader
from .service import PropertyDataService, PropertyFilters

__all__ = [
    "MapBounds",
    "OperationType",
    "PropertyRecord",
    "PropertyType",
    "DataLoadError",
    "PropertyFileLoader",
    "PropertyDataService",
    "PropertyFilters",
]
