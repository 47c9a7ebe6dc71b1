"""Tests for CLI argument parsing, logging and entry point."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from tasktaker.tui import cli
from tasktaker.tui.cli import JSONFormatter, _parse_args, main


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        args = _parse_args([])

        assert args.config is None
        assert args.data_dir is None
        assert args.debug is False

    def test_all_options(self, tmp_path: Path) -> None:
        args = _parse_args(["--config", str(tmp_path / "c.json"), "--data-dir", "d", "--debug"])

        assert args.config == tmp_path / "c.json"
        assert args.data_dir == Path("d")
        assert args.debug is True


class TestJSONFormatter:
    """Tests for structured log formatting."""

    def test_format_includes_context(self) -> None:
        record = logging.LogRecord(
            name="tasktaker",
            level=logging.INFO,
            pathname=__file__,
            lineno=10,
            msg="Saved %d task(s)",
            args=(3,),
            exc_info=None,
        )
        record.extra_context = {"key": "tasks"}

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["event"] == "Saved 3 task(s)"
        assert data["context"]["key"] == "tasks"
        assert data["context"]["line"] == 10
        assert "timestamp" in data


class TestMain:
    """Tests for the main entry point."""

    @pytest.fixture(autouse=True)
    def _restore_logging(self):
        root = logging.getLogger()
        handlers = root.handlers[:]
        level = root.level
        yield
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in handlers:
            root.addHandler(handler)
        root.setLevel(level)

    def test_invalid_config_returns_1(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text("{oops", encoding="utf-8")

        assert main(["--config", str(config_path)]) == 1

    def test_runs_app_with_data_dir_override(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps({"log_file": str(tmp_path / "logs" / "app.log")}), encoding="utf-8"
        )

        with patch.object(cli.TaskTakerApp, "run", return_value=0) as run, patch.object(
            cli.signal, "signal"
        ):
            exit_code = main(["--config", str(config_path), "--data-dir", str(tmp_path / "d")])

        assert exit_code == 0
        run.assert_called_once()
        assert (tmp_path / "logs" / "app.log").exists()

    def test_crash_returns_1(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps({"log_file": str(tmp_path / "app.log"), "data_dir": str(tmp_path)}),
            encoding="utf-8",
        )

        with patch.object(
            cli.TaskTakerApp, "run", side_effect=RuntimeError("boom")
        ), patch.object(cli.signal, "signal"):
            assert main(["--config", str(config_path)]) == 1
