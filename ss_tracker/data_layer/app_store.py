"""Disk-backed snapshot store for application data.

The whole application state is kept as one JSON blob under a fixed key,
mirroring a browser key-value store:

- Missing top-level keys, and missing keys inside ``userProfile`` and
  ``dailyStats``, fall back to the defaults
- Unknown keys are ignored
- Saving is read-modify-write with last-write-wins semantics
- Storage errors are logged and never raised to callers
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ss_tracker.data_layer.defaults import DEFAULT_DATA, default_app_data
from ss_tracker.data_layer.models import AppData

logger = logging.getLogger(__name__)

STORAGE_KEY = "SS_TRACKER_DB_V1"

# Sections merged key-by-key with the defaults rather than replaced wholesale
NESTED_SECTIONS = ("userProfile", "dailyStats")


def merge_over_defaults(stored: Dict[str, Any]) -> Dict[str, Any]:
    """Merge a stored snapshot dict over ``DEFAULT_DATA``.

    Args:
        stored: Parsed snapshot (may be partial)

    Returns:
        Complete snapshot dictionary
    """
    merged = {**DEFAULT_DATA, **stored}
    for section in NESTED_SECTIONS:
        merged[section] = {**DEFAULT_DATA[section], **(stored.get(section) or {})}
    return merged


class AppDataStore:
    """JSON file store for the application snapshot.

    Usage:
        store = AppDataStore(data_dir="./.ss_tracker")
        data = store.load()
        store.save({"dailyStats": data.daily_stats.to_dict()})
        store.clear()
    """

    DEFAULT_DATA_DIR = ".ss_tracker"

    def __init__(self, data_dir: Optional[str] = None, key: str = STORAGE_KEY):
        """Initialize store.

        Args:
            data_dir: Directory holding the snapshot file (created on first save)
            key: Storage key, used as the file name
        """
        self.data_dir = Path(data_dir or self.DEFAULT_DATA_DIR)
        self.key = key

    @property
    def file_path(self) -> Path:
        return self.data_dir / f"{self.key}.json"

    def load(self) -> AppData:
        """Load the persisted snapshot merged over defaults.

        Returns:
            AppData; the default snapshot if nothing usable is stored
        """
        if not self.file_path.exists():
            return default_app_data()

        try:
            with open(self.file_path, "r") as f:
                stored = json.load(f)
            if not isinstance(stored, dict):
                raise TypeError(f"expected a JSON object, got {type(stored).__name__}")
            return AppData.from_dict(merge_over_defaults(stored))
        except (
            OSError,
            json.JSONDecodeError,
            KeyError,
            TypeError,
            ValueError,
            OverflowError,
            RecursionError,
        ) as e:
            logger.error("Error loading data from %s: %s", self.file_path, e)
            return default_app_data()

    def save(self, data: Union[AppData, Dict[str, Any]]) -> None:
        """Merge ``data`` over the current snapshot and persist the result.

        Args:
            data: Full AppData, or a dict of top-level snapshot sections
                (e.g. ``{"meals": [...]}``)
        """
        partial = data.to_dict() if isinstance(data, AppData) else dict(data)
        try:
            current = self.load().to_dict()
            payload = json.dumps({**current, **partial}, indent=2)
            self.data_dir.mkdir(parents=True, exist_ok=True)
            self.file_path.write_text(payload)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Error saving data to %s: %s", self.file_path, e)

    def clear(self) -> None:
        """Remove the persisted snapshot."""
        try:
            self.file_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error("Error clearing %s: %s", self.file_path, e)
