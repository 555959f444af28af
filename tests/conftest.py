"""Shared fixtures: manual clock, recording surface, Qt application and settings."""

import os
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from parcel_map.sync import FocusPoint, RenderingSurface, Scheduler, TimerHandle  # noqa: E402


class ManualTimerHandle(TimerHandle):
    def __init__(self, due_ms: int, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    def is_active(self) -> bool:
        return not (self.cancelled or self.fired)


class ManualScheduler(Scheduler):
    """Deterministic clock: timers fire only when advance() passes them."""

    def __init__(self) -> None:
        self.now_ms = 0
        self.timers: List[ManualTimerHandle] = []

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        handle = ManualTimerHandle(self.now_ms + delay_ms, callback)
        self.timers.append(handle)
        return handle

    def advance(self, ms: int) -> None:
        target = self.now_ms + ms
        while True:
            due = [t for t in self.timers if t.is_active() and t.due_ms <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due_ms)
            self.now_ms = timer.due_ms
            timer.fired = True
            timer.callback()
        self.now_ms = target

    @property
    def active_count(self) -> int:
        return sum(1 for t in self.timers if t.is_active())


class RecordingSurface(RenderingSurface):
    """Surface that records calls; readiness and failures are configurable."""

    def __init__(self) -> None:
        self.ready = True
        self.fail_with: Optional[Exception] = None
        self.animations: List[Tuple[FocusPoint, int, float]] = []
        self.relayouts = 0

    def get_container_ready(self) -> bool:
        return self.ready

    def animate_to(self, focus: FocusPoint, zoom: int, duration_seconds: float) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.animations.append((focus, zoom, duration_seconds))

    def force_relayout(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.relayouts += 1


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def app_settings(tmp_path: Path, qapp):
    from PySide6.QtCore import QSettings
    from parcel_map.settings import AppSettings

    backend = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    return AppSettings(profile="test", backend=backend)


@pytest.fixture
def listings_file(tmp_path: Path) -> Path:
    path = tmp_path / "listings.json"
    path.write_text(
        """[
  {"id": "p1", "title": "Loft in Palermo", "price": 250000, "operationType": "SALE",
   "type": "APARTMENT", "latitude": -34.5880, "longitude": -58.4300, "rooms": 2,
   "city": "Buenos Aires"},
  {"id": "p2", "title": "House in Belgrano", "price": 480000, "operationType": "SALE",
   "type": "HOUSE", "latitude": -34.5620, "longitude": -58.4560, "rooms": 5},
  {"id": "p3", "title": "Office downtown", "price": 1800, "operation_type": "RENT",
   "property_type": "OFFICE", "latitude": -34.6037, "longitude": -58.3816},
  {"id": "p4", "title": "Unmapped plot", "price": 90000, "type": "LAND"},
  {"id": "p5", "title": "Sold flat", "price": 150000, "latitude": -34.6000,
   "longitude": -58.3900, "status": "SOLD"},
  {"title": "Missing id"},
  {"id": "p7", "title": "Bad price", "price": "a lot"}
]""",
        encoding="utf-8",
    )
    return path
