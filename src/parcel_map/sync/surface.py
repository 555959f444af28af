"""
Rendering surface contract consumed by the sync components.
"""

from abc import ABC, abstractmethod

from .focus import FocusPoint


class RenderingSurface(ABC):
    """Map-like viewport that can recentre with animation and relayout."""

    @abstractmethod
    def get_container_ready(self) -> bool:
        """Return True when the surface is attached and has a usable size."""

    @abstractmethod
    def animate_to(self, focus: FocusPoint, zoom: int, duration_seconds: float) -> None:
        """Start an animated transition centred on ``focus``.

        May raise if the surface became invalid since the readiness check.
        """

    @abstractmethod
    def force_relayout(self) -> None:
        """Recompute the surface size and redraw."""
