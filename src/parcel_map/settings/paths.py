"""
Path settings for parcel_map.
"""

from pathlib import Path
from typing import Optional, Union

from .base import SettingsSection


class PathSettings(SettingsSection):
    """Remembers the last opened listings file."""

    @property
    def last_data_file(self) -> Optional[Path]:
        value = self._get_str("paths/last_data_file", "")
        return Path(value) if value else None

    @last_data_file.setter
    def last_data_file(self, value: Optional[Union[str, Path]]) -> None:
        if value:
            self._set("paths/last_data_file", str(Path(value)))
        else:
            self.settings.remove("paths/last_data_file")
            self.settings.sync()
