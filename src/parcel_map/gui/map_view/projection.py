"""Coordinate transformations for map rendering.

This module converts between geographic coordinates and scene pixels
using spherical Web Mercator with square tiles.
"""

import math

from parcel_map.properties.models import MapBounds
from parcel_map.sync.focus import FocusPoint

# Latitude limit of the square Web Mercator world
MAX_LATITUDE = 85.05112878


class MercatorProjection:
    """Projects latitude/longitude to pixel coordinates at a zoom level.

    Zoom 0 maps the whole world to one tile; each zoom step doubles the
    world size in both directions.
    """

    def __init__(self, tile_size: int = 256):
        """Initialize the projection.

        Args:
            tile_size: Width and height of a single tile in pixels
        """
        self.tile_size = tile_size

    def world_size(self, zoom: float) -> float:
        """Side length of the world in pixels at ``zoom``."""
        return self.tile_size * (2.0 ** zoom)

    def to_pixels(self, lat: float, lon: float, zoom: float) -> tuple[float, float]:
        """Convert latitude/longitude to world pixel coordinates.

        Latitudes outside the Mercator range are clamped.

        Args:
            lat: Latitude in degrees
            lon: Longitude in degrees
            zoom: Zoom level (can be fractional during animations)

        Returns:
            Tuple of (x, y) pixels, origin at the north-west corner
        """
        lat = max(-MAX_LATITUDE, min(MAX_LATITUDE, lat))
        size = self.world_size(zoom)

        x = (lon + 180.0) / 360.0 * size
        sin_lat = math.sin(math.radians(lat))
        y = (0.5 - math.log((1 + sin_lat) / (1 - sin_lat)) / (4 * math.pi)) * size
        return x, y

    def to_lat_lon(self, x: float, y: float, zoom: float) -> tuple[float, float]:
        """Inverse of to_pixels.

        Returns:
            Tuple of (latitude, longitude) in degrees
        """
        size = self.world_size(zoom)
        lon = x / size * 360.0 - 180.0
        n = math.pi - 2.0 * math.pi * y / size
        lat = math.degrees(math.atan(math.sinh(n)))
        return lat, lon

    def focus_to_pixels(self, focus: FocusPoint, zoom: float) -> tuple[float, float]:
        return self.to_pixels(focus.latitude, focus.longitude, zoom)

    def bounds_for_view(
        self, center: FocusPoint, zoom: float, width: int, height: int
    ) -> MapBounds:
        """Geographic bounds of a viewport centred on ``center``.

        Args:
            center: Viewport centre
            zoom: Current zoom level
            width: Viewport width in pixels
            height: Viewport height in pixels
        """
        cx, cy = self.focus_to_pixels(center, zoom)
        north, west = self.to_lat_lon(cx - width / 2, cy - height / 2, zoom)
        south, east = self.to_lat_lon(cx + width / 2, cy + height / 2, zoom)
        return MapBounds(min_lat=south, max_lat=north, min_lon=west, max_lon=east)
