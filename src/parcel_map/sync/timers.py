"""
One-shot timer scheduling for the view synchronization components.

The sync components only see the abstract Scheduler/TimerHandle pair.
QtScheduler drives them from the Qt event loop; tests use a manual clock.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer


class TimerHandle(ABC):
    """Handle to a single scheduled callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Cancel the callback. Safe to call more than once."""

    @abstractmethod
    def is_active(self) -> bool:
        """True until the callback fires or is cancelled."""


class Scheduler(ABC):
    """Source of one-shot deferred callbacks."""

    @abstractmethod
    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay_ms`` milliseconds.

        Args:
            delay_ms: Delay in milliseconds (>= 0)
            callback: Zero-argument callable

        Returns:
            Handle that can cancel the pending callback
        """


class QtTimerHandle(TimerHandle):
    """TimerHandle backed by a single-shot QTimer."""

    def __init__(self, timer: QTimer):
        self._timer: Optional[QTimer] = timer

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._release()

    def is_active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def _release(self) -> None:
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.deleteLater()


class QtScheduler(Scheduler):
    """Scheduler that runs callbacks on the Qt event loop.

    Each call creates its own single-shot QTimer, so cancelling one handle
    never affects another.
    """

    def __init__(self, parent: Optional[QObject] = None):
        """Initialize the scheduler.

        Args:
            parent: Optional QObject owning the created timers
        """
        self.parent = parent

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        timer = QTimer(self.parent)
        timer.setSingleShot(True)
        handle = QtTimerHandle(timer)

        def _fire() -> None:
            handle._release()
            callback()

        timer.timeout.connect(_fire)
        timer.start(max(0, int(delay_ms)))
        return handle
