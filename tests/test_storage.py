"""Unit tests for the JSON file key-value storage."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tasktaker.exceptions import StorageError
from tasktaker.storage import FileKeyValueStorage


@pytest.fixture
def storage_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "storage.json"


@pytest.fixture
def storage(storage_path: Path) -> FileKeyValueStorage:
    return FileKeyValueStorage(storage_path)


class TestFileKeyValueStorage:
    """Tests for get/set/remove semantics."""

    def test_missing_file_returns_none(self, storage: FileKeyValueStorage) -> None:
        assert storage.get_item("tasks") is None

    def test_set_then_get(self, storage: FileKeyValueStorage, storage_path: Path) -> None:
        storage.set_item("tasks", "[]")

        assert storage.get_item("tasks") == "[]"
        assert storage_path.exists()

    def test_set_overwrites_value(self, storage: FileKeyValueStorage) -> None:
        storage.set_item("tasks", "first")
        storage.set_item("tasks", "second")

        assert storage.get_item("tasks") == "second"

    def test_other_keys_preserved(self, storage: FileKeyValueStorage) -> None:
        storage.set_item("other", "keep")
        storage.set_item("tasks", "[]")

        assert storage.get_item("other") == "keep"

    def test_no_temp_files_left(self, storage: FileKeyValueStorage, storage_path: Path) -> None:
        storage.set_item("tasks", "[]")

        assert [p.name for p in storage_path.parent.iterdir()] == ["storage.json"]

    def test_corrupted_file_raises(self, storage: FileKeyValueStorage, storage_path: Path) -> None:
        storage_path.parent.mkdir(parents=True)
        storage_path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError):
            storage.get_item("tasks")

    def test_non_object_file_raises(
        self, storage: FileKeyValueStorage, storage_path: Path
    ) -> None:
        storage_path.parent.mkdir(parents=True)
        storage_path.write_text(json.dumps(["tasks"]), encoding="utf-8")

        with pytest.raises(StorageError):
            storage.get_item("tasks")

    def test_non_string_value_raises(
        self, storage: FileKeyValueStorage, storage_path: Path
    ) -> None:
        storage_path.parent.mkdir(parents=True)
        storage_path.write_text(json.dumps({"tasks": [1, 2]}), encoding="utf-8")

        with pytest.raises(StorageError):
            storage.get_item("tasks")

    def test_unwritable_location_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        storage = FileKeyValueStorage(blocker / "storage.json")

        with pytest.raises(StorageError):
            storage.set_item("tasks", "[]")
