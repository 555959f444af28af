"""Map view package.

- MercatorProjection: latitude/longitude <-> pixel conversions
- MapView: map widget with markers, zoom controls and fly-to animation
- MapViewSurface: RenderingSurface adapter used by the sync components
"""

from .projection import MercatorProjection
from .map_view import MapView, MapViewSurface

__all__ = [
    "MercatorProjection",
    "MapView",
    "MapViewSurface",
]
