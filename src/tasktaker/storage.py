"""Local key-value storage backed by a single JSON file.

Values are plain strings keyed by name, mirroring a device-local async
storage slot. Writes replace the whole file atomically.
"""

from __future__ import annotations

import json
import logging
import tempfile
import threading
from pathlib import Path

from .exceptions import StorageError

logger = logging.getLogger(__name__)


class FileKeyValueStorage:
    """String key-value store persisted to one JSON object file."""

    def __init__(self, path: Path):
        """Initialize storage.

        Args:
            path: JSON file holding all keys (created on first write)
        """
        self.path = path
        self._lock = threading.Lock()

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as err:
            raise StorageError(f"Failed to read {self.path}: {err}") from err

        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self.path} does not contain an object")
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path_str = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                text=True,
            )
        except OSError as err:
            raise StorageError(f"Failed to prepare write to {self.path}: {err}") from err

        temp_path = Path(temp_path_str)
        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            temp_path.replace(self.path)
        except OSError as err:
            try:
                temp_path.unlink()
            except OSError:
                pass
            raise StorageError(f"Failed to write {self.path}: {err}") from err

    def get_item(self, key: str) -> str | None:
        """Return the value stored under key, or None if absent.

        Raises:
            StorageError: If the storage file is unreadable or malformed
        """
        with self._lock:
            value = self._read_all().get(key)

        if value is not None and not isinstance(value, str):
            raise StorageError(f"Value for key {key!r} is not a string")
        return value

    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value.

        Raises:
            StorageError: If the storage file cannot be read or written
        """
        with self._lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)
        logger.debug(f"Stored key {key!r} ({len(value)} chars)")
