"""
JSON loader for property listings.

Reads listing files with orjson. A file holds a list of listing objects, or
an object with a ``properties`` list.
"""

import logging
from pathlib import Path
from typing import List, Union

import orjson

from .models import PropertyRecord


class DataLoadError(Exception):
    """Raised when a listings file cannot be read or parsed."""
    pass


class PropertyFileLoader:
    """Loads and validates property records from JSON files."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load(self, path: Union[str, Path]) -> List[PropertyRecord]:
        """Read a listings file.

        Invalid entries are skipped with a warning.

        Args:
            path: Path to the JSON file

        Returns:
            Parsed records in file order

        Raises:
            DataLoadError: if the file is missing, unreadable or not valid JSON
        """
        json_file = Path(path)
        try:
            with json_file.open("rb") as f:  # orjson works with bytes
                data = orjson.loads(f.read())
        except FileNotFoundError as e:
            raise DataLoadError(f"Listings file not found: {json_file}") from e
        except OSError as e:
            raise DataLoadError(f"Cannot read listings file {json_file}: {e}") from e
        except orjson.JSONDecodeError as e:
            raise DataLoadError(f"Invalid JSON in {json_file}: {e}") from e

        if isinstance(data, dict):
            data = data.get("properties", [])
        if not isinstance(data, list):
            raise DataLoadError(f"Expected a list of listings in {json_file}")

        records: List[PropertyRecord] = []
        for index, obj in enumerate(data):
            if not isinstance(obj, dict):
                self.logger.warning(f"Skipping non-object entry #{index} in {json_file}")
                continue
            try:
                records.append(PropertyRecord.from_dict(obj))
            except (KeyError, ValueError, TypeError) as e:
                self.logger.warning(f"Skipping invalid listing #{index} in {json_file}: {e}")

        self.logger.info(f"Loaded {len(records)} listings from {json_file}")
        return records
