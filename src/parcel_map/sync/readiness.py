"""
Deferred relayout for freshly attached surfaces.

Surfaces mounted inside hidden tabs or animated containers can report a
stale or zero size right after they are shown. SurfaceReadinessGuard forces
a single relayout shortly after attach.
"""

import logging
from typing import Optional

from .surface import RenderingSurface
from .timers import Scheduler, TimerHandle


class SurfaceReadinessGuard:
    """Calls ``force_relayout()`` once per attach, unless detached first."""

    def __init__(self, scheduler: Scheduler, delay_ms: int = 200):
        self.scheduler = scheduler
        self.delay_ms = delay_ms
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self._surface: Optional[RenderingSurface] = None
        self._timer: Optional[TimerHandle] = None

    def on_attach(self, surface: RenderingSurface) -> None:
        """Schedule the one-shot relayout for ``surface``."""
        self.on_detach()
        self._surface = surface
        self._timer = self.scheduler.schedule(self.delay_ms, self._fire)

    def on_detach(self) -> None:
        """Cancel the relayout if it has not fired yet."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._surface = None

    teardown = on_detach

    @property
    def is_pending(self) -> bool:
        return self._timer is not None and self._timer.is_active()

    def _fire(self) -> None:
        surface = self._surface
        self._timer = None
        if surface is None:
            return

        try:
            surface.force_relayout()
            self.logger.debug("Forced surface relayout")
        except Exception as e:
            self.logger.warning(f"Surface relayout failed: {e}", exc_info=True)
