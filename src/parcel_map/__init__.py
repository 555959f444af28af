"""
parcel_map: property listings on an interactive map

Keeps the map centred on the selected listing with debounced fly-to
animations that never touch a surface that is not ready.
"""

__version__ = "0.1.0"
__author__ = "parcel_map Contributors"

from .sync import (
    FocusPoint,
    RenderingSurface,
    Scheduler,
    QtScheduler,
    SyncConfig,
    ViewSyncController,
    SurfaceReadinessGuard,
)
from .properties import MapBounds, PropertyRecord, PropertyDataService
from .utils.logging_config import setup_logging

__all__ = [
    # View synchronization
    "FocusPoint",
    "RenderingSurface",
    "Scheduler",
    "QtScheduler",
    "SyncConfig",
    "ViewSyncController",
    "SurfaceReadinessGuard",

    # Listings
    "MapBounds",
    "PropertyRecord",
    "PropertyDataService",

    # Logging
    "setup_logging",
]
