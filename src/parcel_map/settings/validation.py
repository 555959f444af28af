"""
Settings validation system for parcel_map.
"""

import logging
from typing import List, TYPE_CHECKING

from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        map_settings = self.settings.map
        if map_settings.min_zoom > map_settings.max_zoom:
            errors.append(
                f"Minimum zoom {map_settings.min_zoom} is above maximum zoom {map_settings.max_zoom}"
            )
        elif not map_settings.min_zoom <= map_settings.fly_to_zoom <= map_settings.max_zoom:
            errors.append(
                f"Fly-to zoom {map_settings.fly_to_zoom} is outside "
                f"[{map_settings.min_zoom}, {map_settings.max_zoom}]"
            )

        last_file = self.settings.paths.last_data_file
        if last_file is not None and not last_file.exists():
            warnings.append(f"Last listings file no longer exists: {last_file}")

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
