"""CLI entry point for TaskTaker.

This module handles command-line argument parsing, logging setup,
signal handling, and the main entry point.
"""

from __future__ import annotations

import argparse
import json
import logging
import logging.handlers
import signal
import sys
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

from rich.console import Console

from ..config import DEFAULT_CONFIG_PATH, load_config
from ..exceptions import ConfigError
from .app import TaskTakerApp

logger = logging.getLogger(__name__)


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log line
        """
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "event": record.getMessage(),
            "context": {
                "module": record.module,
                "function": record.funcName,
                "line": record.lineno,
            },
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_context"):
            log_data["context"].update(record.extra_context)

        return json.dumps(log_data)


def _setup_logging(log_file: Path, debug: bool) -> None:
    """Setup structured JSON logging to file.

    Args:
        log_file: Path to log file
        debug: Enable debug level logging
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # 10MB max, 3 backups
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(JSONFormatter())
    file_handler.setLevel(logging.DEBUG if debug else logging.INFO)

    root_logger.addHandler(file_handler)

    logger.info(
        "Logging initialized",
        extra={"extra_context": {"log_file": str(log_file), "debug": debug}},
    )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="tasktaker",
        description="Terminal task list with local persistence",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to config.json (default: {DEFAULT_CONFIG_PATH}, used if present)",
    )

    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the task storage file",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


# Global app instance for signal handlers
_app_instance: TaskTakerApp | None = None


def _signal_handler(signum: int, frame) -> None:
    """Handle shutdown signals by ending the main loop."""
    if _app_instance is None:
        sys.exit(130 if signum == signal.SIGINT else 1)

    logger.info(f"Received signal {signum}, shutting down")
    _app_instance.view_state.should_quit = True


def main(argv: list[str] | None = None) -> int:
    """Main entry point for TaskTaker.

    Returns:
        Exit code (0=success, 1=error, 130=SIGINT)
    """
    global _app_instance

    args = _parse_args(argv)
    console = Console()

    try:
        config = load_config(args.config)
    except ConfigError as err:
        console.print(f"[red]Error loading config: {err}[/red]")
        return 1

    if args.data_dir is not None:
        config = replace(config, data_dir=args.data_dir.expanduser().resolve())

    _setup_logging(config.log_file, args.debug)
    logger.info(
        "TaskTaker starting",
        extra={
            "extra_context": {
                "storage_path": str(config.storage_path),
                "debug": args.debug,
            }
        },
    )

    try:
        _app_instance = TaskTakerApp(config, console=console)
        signal.signal(signal.SIGTERM, _signal_handler)

        exit_code = _app_instance.run()

        logger.info("TaskTaker exited", extra={"extra_context": {"exit_code": exit_code}})
        return exit_code

    except Exception as err:
        logger.error(
            "TaskTaker crashed with unhandled exception",
            extra={"extra_context": {"error": str(err)}},
            exc_info=True,
        )
        console.print(f"[red]Fatal error: {err}[/red]")
        console.print(f"[dim]Check logs at: {config.log_file}[/dim]")
        return 1

    finally:
        _app_instance = None


if __name__ == "__main__":
    sys.exit(main())
