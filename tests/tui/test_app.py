"""Integration tests for TaskTakerApp startup, persistence wiring and layout."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from tasktaker.config import Config
from tasktaker.exceptions import StorageError
from tasktaker.models import Notice
from tasktaker.tui.app import TaskTakerApp


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config.from_dict(
        {"data_dir": str(tmp_path / "data"), "log_file": str(tmp_path / "app.log")}
    )


@pytest.fixture
def app(config: Config) -> TaskTakerApp:
    return TaskTakerApp(config, console=Console(width=80, color_system=None))


def stored_tasks(config: Config) -> list[dict]:
    data = json.loads(config.storage_path.read_text(encoding="utf-8"))
    return json.loads(data["tasks"])


def press(app: TaskTakerApp, *keys: str) -> None:
    for key in keys:
        if len(key) > 1 and key not in ("enter", "up", "down", "ctrl+e", "ctrl+u", "delete"):
            for char in key:
                app.handle_key(char)
        else:
            app.handle_key(key)


class TestStartup:
    """Tests for loading state on launch."""

    def test_first_launch_saves_empty_collection(self, app: TaskTakerApp, config: Config) -> None:
        app.load_tasks()
        app.save_worker.flush(timeout=1)

        assert len(app.store) == 0
        assert stored_tasks(config) == []

    def test_hydrates_from_storage(self, app: TaskTakerApp, config: Config) -> None:
        config.data_dir.mkdir(parents=True)
        config.storage_path.write_text(
            json.dumps({"tasks": json.dumps([{"key": "k1", "value": "Buy milk"}])}),
            encoding="utf-8",
        )

        app.load_tasks()

        assert [(t.id, t.text) for t in app.store.tasks] == [("k1", "Buy milk")]
        assert app.view_state.selected_index == 0

    def test_load_failure_shows_notice_and_keeps_file(
        self, app: TaskTakerApp, config: Config
    ) -> None:
        config.data_dir.mkdir(parents=True)
        config.storage_path.write_text("{corrupted", encoding="utf-8")

        app.load_tasks()
        app.save_worker.flush(timeout=1)
        app.process_notices()

        assert len(app.store) == 0
        assert app.view_state.active_notice == Notice.load_failed()
        assert config.storage_path.read_text(encoding="utf-8") == "{corrupted"

    def test_first_change_after_load_failure_replaces_stored_data(
        self, app: TaskTakerApp, config: Config
    ) -> None:
        config.data_dir.mkdir(parents=True)
        config.storage_path.write_text(json.dumps({"tasks": "{corrupted"}), encoding="utf-8")
        app.load_tasks()

        press(app, "Buy milk", "enter")
        app.save_worker.flush(timeout=1)

        assert [entry["value"] for entry in stored_tasks(config)] == ["Buy milk"]


class TestPersistenceWiring:
    """Tests for saves triggered by key presses."""

    def test_scenario_survives_relaunch(self, app: TaskTakerApp, config: Config) -> None:
        app.load_tasks()
        press(app, "Buy milk", "enter", "Walk dog", "enter")
        assert [t.text for t in app.store.tasks] == ["Buy milk", "Walk dog"]

        app.view_state.selected_index = 0
        press(app, "ctrl+e", "ctrl+u", "Buy oat milk", "enter")
        assert [t.text for t in app.store.tasks] == ["Buy oat milk", "Walk dog"]

        app.view_state.selected_index = 1
        press(app, "delete")
        assert [t.text for t in app.store.tasks] == ["Buy oat milk"]
        app.save_worker.flush(timeout=1)

        relaunched = TaskTakerApp(config, console=Console(width=80, color_system=None))
        relaunched.load_tasks()

        assert [t.text for t in relaunched.store.tasks] == ["Buy oat milk"]
        assert relaunched.store.tasks == app.store.tasks

    def test_save_failure_surfaces_single_notice(self, app: TaskTakerApp) -> None:
        app.load_tasks()
        app.save_worker.flush(timeout=1)

        with patch.object(
            app.persister.storage, "set_item", side_effect=StorageError("disk full")
        ):
            press(app, "Buy milk", "enter")
            app.save_worker.flush(timeout=1)

        app.process_notices()

        assert [t.text for t in app.store.tasks] == ["Buy milk"]
        assert list(app.view_state.pending_notices) == [Notice.save_failed()]


class TestKeyFeedback:
    """Tests for status message and quit handling."""

    def test_status_message_set(self, app: TaskTakerApp) -> None:
        press(app, "a", "enter")

        assert app.view_state.status_message == "Task added"

    def test_quit_sets_flag(self, app: TaskTakerApp) -> None:
        app.handle_key("ctrl+q")

        assert app.view_state.should_quit is True


class TestLayout:
    """Tests for layout building and rendering."""

    def test_layout_regions(self, app: TaskTakerApp) -> None:
        layout = app._build_layout()

        names = [child.name for child in layout.children]
        assert names == ["header", "entry", "main", "footer"]

    def test_render_list(self, app: TaskTakerApp) -> None:
        press(app, "Buy milk", "enter")
        layout = app._build_layout()
        app._render_layout(layout)

        console = Console(width=80, height=24, record=True, color_system=None)
        console.print(layout)
        output = console.export_text()

        assert "TaskTaker" in output
        assert "Buy milk" in output
        assert "Add" in output

    def test_render_notice_replaces_list(self, app: TaskTakerApp) -> None:
        press(app, "Buy milk", "enter")
        app.view_state.push_notice(Notice.save_failed())
        layout = app._build_layout()
        app._render_layout(layout)

        console = Console(width=80, height=24, record=True, color_system=None)
        console.print(layout)
        output = console.export_text()

        assert "Failed to save tasks" in output
        assert "Buy milk" not in output

    def test_viewport_size_tracks_terminal(self, app: TaskTakerApp) -> None:
        app.terminal_height = 30

        assert app.list_viewport_size == 30 - 7
