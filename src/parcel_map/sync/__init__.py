"""
Map view synchronization.

- FocusPoint: desired view centre
- ViewSyncController: debounced fly-to on focus change
- SurfaceReadinessGuard: one-shot relayout after attach
- Scheduler / QtScheduler: one-shot timer source
"""

from .focus import FocusPoint
from .surface import RenderingSurface
from .timers import Scheduler, TimerHandle, QtScheduler
from .view_sync import SyncConfig, SyncState, ViewSyncController
from .readiness import SurfaceReadinessGuard

__all__ = [
    "FocusPoint",
    "RenderingSurface",
    "Scheduler",
    "TimerHandle",
    "QtScheduler",
    "SyncConfig",
    "SyncState",
    "ViewSyncController",
    "SurfaceReadinessGuard",
]
