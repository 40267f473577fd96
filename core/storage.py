"""
Local Storage - Key/Value JSON Persistence

A small file-backed key/value store playing the role of the browser's local
storage. Entries are kept as a JSON array under a single key, read once at
startup and written only on an explicit save.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Final, Iterable, List, Optional

from core.errors import StorageError
from core.models import LeasingEntry
from core.seed import initial_data


logger = logging.getLogger(__name__)


DEFAULT_STORAGE_KEY: Final[str] = "leasingData"
DEFAULT_STORAGE_PATH: Final[str] = "data/local_storage.json"


class LocalStorage:
    """
    File-backed key/value store.

    The file holds one JSON object; each key maps to any JSON value.
    Writes go to a temporary file first and are moved into place, so a
    failed write never leaves a truncated file behind.
    """

    def __init__(self, path: Optional[str] = None):
        self._path = Path(path or DEFAULT_STORAGE_PATH)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Unexpected storage layout in {self._path}")
        return data

    def _write_all(self, data: dict[str, Any]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise StorageError(f"Could not write {self._path}: {e}") from e

    def get_item(self, key: str) -> Optional[Any]:
        """
        Read a value.

        Returns:
            The stored value, or None if the key is absent

        Raises:
            StorageError: If the storage file is unreadable or corrupt
        """
        return self._read_all().get(key)

    def set_item(self, key: str, value: Any) -> None:
        """
        Write a value, keeping all other keys.

        Raises:
            StorageError: If the file cannot be read or written
        """
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


# =============================================================================
# Entry Persistence
# =============================================================================


def load_entries(
    storage: LocalStorage,
    key: str = DEFAULT_STORAGE_KEY,
) -> List[LeasingEntry]:
    """
    Load persisted entries, falling back to the seed dataset.

    Absence of the key, an unreadable file or malformed content all yield
    the seed data; failures are logged rather than raised.
    """
    try:
        raw = storage.get_item(key)
    except StorageError as e:
        logger.error("Failed to load data from storage: %s", e)
        return initial_data()

    if raw is None:
        logger.info("No saved data under %r, using seed dataset", key)
        return initial_data()

    try:
        if not isinstance(raw, list):
            raise ValueError("stored value is not a list")
        entries = [LeasingEntry.from_dict(item) for item in raw]
        if len({e.id for e in entries}) != len(entries):
            raise ValueError("stored entries contain duplicate ids")
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.error("Failed to parse saved data under %r: %s", key, e)
        return initial_data()

    logger.info("Loaded %d entries from storage", len(entries))
    return entries


def save_entries(
    storage: LocalStorage,
    entries: Iterable[LeasingEntry],
    key: str = DEFAULT_STORAGE_KEY,
) -> int:
    """
    Persist entries as a JSON array under ``key``.

    Returns:
        Number of entries written

    Raises:
        StorageError: If the write fails
    """
    payload = [entry.to_dict() for entry in entries]
    storage.set_item(key, payload)
    logger.info("Saved %d entries to storage", len(payload))
    return len(payload)
