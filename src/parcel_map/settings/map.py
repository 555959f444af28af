"""
Map view settings for parcel_map.
"""

import logging

from ..sync.focus import FocusPoint
from ..sync.view_sync import SyncConfig
from .base import SettingsSection

logger = logging.getLogger(__name__)

BASE_LAYERS = ["cartoLight", "cartoDark", "osm", "satellite"]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class MapSettings(SettingsSection):
    """Manages map camera, fly-to timing and display preferences."""

    # === FLY-TO SYNCHRONIZATION ===

    @property
    def fly_to_delay_ms(self) -> int:
        """Debounce delay before a fly-to starts (0-5000 ms)."""
        return int(_clamp(self._get_int("map/fly_to_delay_ms", 100), 0, 5000))

    @fly_to_delay_ms.setter
    def fly_to_delay_ms(self, value: int) -> None:
        self._set("map/fly_to_delay_ms", int(_clamp(value, 0, 5000)))

    @property
    def fly_to_zoom(self) -> int:
        """Zoom level a fly-to lands on."""
        return self._get_int("map/fly_to_zoom", 17)

    @fly_to_zoom.setter
    def fly_to_zoom(self, value: int) -> None:
        self._set("map/fly_to_zoom", int(value))

    @property
    def fly_to_duration(self) -> float:
        """Fly-to animation length in seconds (0-10 s)."""
        return _clamp(self._get_float("map/fly_to_duration", 1.5), 0.0, 10.0)

    @fly_to_duration.setter
    def fly_to_duration(self, value: float) -> None:
        self._set("map/fly_to_duration", _clamp(float(value), 0.0, 10.0))

    @property
    def relayout_delay_ms(self) -> int:
        """Delay before the post-attach relayout (0-5000 ms)."""
        return int(_clamp(self._get_int("map/relayout_delay_ms", 200), 0, 5000))

    @relayout_delay_ms.setter
    def relayout_delay_ms(self, value: int) -> None:
        self._set("map/relayout_delay_ms", int(_clamp(value, 0, 5000)))

    def sync_config(self) -> SyncConfig:
        """Build the SyncConfig used by the view synchronization components."""
        return SyncConfig(
            delay_ms=self.fly_to_delay_ms,
            zoom=self.fly_to_zoom,
            duration_seconds=self.fly_to_duration,
            relayout_delay_ms=self.relayout_delay_ms,
        )

    # === CAMERA ===

    @property
    def initial_zoom(self) -> int:
        return self._get_int("map/initial_zoom", 15)

    @initial_zoom.setter
    def initial_zoom(self, value: int) -> None:
        self._set("map/initial_zoom", int(value))

    @property
    def min_zoom(self) -> int:
        return self._get_int("map/min_zoom", 14)

    @min_zoom.setter
    def min_zoom(self, value: int) -> None:
        self._set("map/min_zoom", int(value))

    @property
    def max_zoom(self) -> int:
        return self._get_int("map/max_zoom", 18)

    @max_zoom.setter
    def max_zoom(self, value: int) -> None:
        self._set("map/max_zoom", int(value))

    @property
    def default_center(self) -> FocusPoint:
        """Map centre used before anything is selected."""
        return FocusPoint(
            self._get_float("map/default_center_lat", -34.6037),
            self._get_float("map/default_center_lon", -58.3816),
        )

    @default_center.setter
    def default_center(self, value: FocusPoint) -> None:
        self.settings.setValue("map/default_center_lat", value.latitude)
        self._set("map/default_center_lon", value.longitude)

    # === DISPLAY ===

    @property
    def scroll_zoom_enabled(self) -> bool:
        """Check if mouse wheel zoom is enabled."""
        return self._get_bool("map/scroll_zoom_enabled", True)

    @scroll_zoom_enabled.setter
    def scroll_zoom_enabled(self, value: bool) -> None:
        self._set("map/scroll_zoom_enabled", bool(value))

    @property
    def properties_limit(self) -> int:
        """Maximum number of listings shown in the sidebar (>= 1)."""
        return max(1, self._get_int("map/properties_limit", 4))

    @properties_limit.setter
    def properties_limit(self, value: int) -> None:
        if value > 0:
            self._set("map/properties_limit", int(value))
        else:
            logger.warning(
                f"Invalid properties limit: {value}, keeping current: {self.properties_limit}"
            )

    @property
    def base_layer(self) -> str:
        value = self._get_str("map/base_layer", "cartoLight")
        return value if value in BASE_LAYERS else "cartoLight"

    @base_layer.setter
    def base_layer(self, value: str) -> None:
        if value in BASE_LAYERS:
            self._set("map/base_layer", value)
        else:
            logger.warning(f"Unknown base layer: {value}, keeping current: {self.base_layer}")
