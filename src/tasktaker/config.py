"""Runtime configuration for TaskTaker."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from .exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path("~/.config/tasktaker/config.json")
DEFAULT_DATA_DIR = "~/.local/share/tasktaker"
DEFAULT_LOG_FILE = "~/.cache/tasktaker/tasktaker.log"


def _expand(value: str) -> Path:
    return Path(os.path.expanduser(value)).resolve()


@dataclass(frozen=True)
class Config:
    """Runtime configuration loaded from an optional config.json."""

    data_dir: Path
    log_file: Path
    storage_filename: str = "storage.json"
    title: str = "TaskTaker"
    refresh_per_second: int = 4

    @property
    def storage_path(self) -> Path:
        return self.data_dir / self.storage_filename

    @classmethod
    def from_dict(cls, payload: dict) -> Config:
        """Create a Config object from a raw dictionary."""
        if not isinstance(payload, dict):
            raise TypeError("config must be a JSON object")

        data_dir = _expand(payload.get("data_dir", DEFAULT_DATA_DIR))
        log_file = _expand(payload.get("log_file", DEFAULT_LOG_FILE))
        storage_filename = str(payload.get("storage_filename", "storage.json"))
        title = str(payload.get("title", "TaskTaker"))
        refresh_per_second = int(payload.get("refresh_per_second", 4))

        if not storage_filename or "/" in storage_filename:
            raise ValueError(f"storage_filename must be a plain file name, got {storage_filename!r}")
        if refresh_per_second <= 0:
            raise ValueError(f"refresh_per_second must be positive, got {refresh_per_second}")

        return cls(
            data_dir=data_dir,
            log_file=log_file,
            storage_filename=storage_filename,
            title=title,
            refresh_per_second=refresh_per_second,
        )


def load_config(path: Path | None = None) -> Config:
    """Load configuration from path, falling back to defaults if it is absent.

    Raises:
        ConfigError: If the file exists but cannot be read or is invalid
    """
    path = path or DEFAULT_CONFIG_PATH.expanduser()
    if not path.exists():
        return Config.from_dict({})

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
        return Config.from_dict(data)
    except (OSError, json.JSONDecodeError, TypeError, ValueError) as err:
        raise ConfigError(f"Invalid config {path}: {err}") from err
