"""
View synchronization between a selected focus point and a map surface.

ViewSyncController keeps the surface centred on an externally supplied
FocusPoint. Rapid focus changes are coalesced through a short delay, and an
animation is only issued for a genuine change on a ready surface.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .focus import FocusPoint
from .surface import RenderingSurface
from .timers import Scheduler, TimerHandle


@dataclass(frozen=True)
class SyncConfig:
    """Timing and camera constants for fly-to transitions."""

    delay_ms: int = 100
    zoom: int = 17
    duration_seconds: float = 1.5
    relayout_delay_ms: int = 200


@dataclass
class SyncState:
    """Per-attachment state owned by one ViewSyncController."""

    last_applied_focus: Optional[FocusPoint] = None
    pending_timer: Optional[TimerHandle] = None


class ViewSyncController:
    """Reconciles the desired focus with the surface's visual centre.

    States are idle and timer-pending. A new focus cancels the pending
    timer before scheduling its own, so there is never more than one
    animation in flight per controller.
    """

    def __init__(self, scheduler: Scheduler, config: Optional[SyncConfig] = None):
        """Initialize the controller.

        Args:
            scheduler: Timer source used for the debounce delay
            config: Delay, zoom and duration (defaults to SyncConfig())
        """
        self.scheduler = scheduler
        self.config = config or SyncConfig()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self._surface: Optional[RenderingSurface] = None
        self._state: Optional[SyncState] = None

    # === LIFECYCLE ===

    def attach(self, surface: RenderingSurface) -> None:
        """Bind to a surface with a fresh SyncState."""
        if self._surface is not None:
            self.detach()

        self._surface = surface
        self._state = SyncState()
        self.logger.debug("Attached to rendering surface")

    def detach(self) -> None:
        """Cancel any pending timer and drop the state."""
        if self._state is not None:
            self._cancel_pending()
            self.logger.debug("Detached from rendering surface")

        self._surface = None
        self._state = None

    teardown = detach

    @property
    def is_attached(self) -> bool:
        return self._surface is not None

    @property
    def is_pending(self) -> bool:
        """True while a fly-to timer is waiting to fire."""
        if self._state is None or self._state.pending_timer is None:
            return False
        return self._state.pending_timer.is_active()

    @property
    def last_applied_focus(self) -> Optional[FocusPoint]:
        return self._state.last_applied_focus if self._state else None

    # === FOCUS HANDLING ===

    def on_focus_changed(self, new_focus: Optional[FocusPoint]) -> None:
        """Request the surface to recentre on ``new_focus``.

        Absent focus is a no-op. Any other focus cancels the pending
        request; a repeat of the last applied focus schedules nothing.
        """
        if new_focus is None or self._state is None:
            return

        self._cancel_pending()
        if new_focus == self._state.last_applied_focus:
            return

        self._state.pending_timer = self.scheduler.schedule(
            self.config.delay_ms, lambda: self._fire(new_focus)
        )
        self.logger.debug(f"Fly-to {new_focus} scheduled in {self.config.delay_ms}ms")

    def _fire(self, focus: FocusPoint) -> None:
        state, surface = self._state, self._surface
        if state is None or surface is None:
            return
        state.pending_timer = None

        try:
            if not surface.get_container_ready():
                self.logger.debug(f"Surface not ready, dropping fly-to {focus}")
                return
            surface.animate_to(focus, self.config.zoom, self.config.duration_seconds)
        except Exception as e:
            self.logger.warning(f"Surface was not ready for fly-to {focus}: {e}", exc_info=True)
            return

        state.last_applied_focus = focus

    def _cancel_pending(self) -> None:
        if self._state is not None and self._state.pending_timer is not None:
            self._state.pending_timer.cancel()
            self._state.pending_timer = None
