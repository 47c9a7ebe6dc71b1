"""Main TUI application loop and layout.

This module wires the task store to persistence and to the views: the store
publishes every collection change to the SaveWorker, failed saves come back as
notices on a queue, and each frame re-renders the whole screen from state.
"""

from __future__ import annotations

import logging
import queue

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.text import Text

from ..config import Config
from ..exceptions import PersistenceReadFailure
from ..models import Notice
from ..persistence import SaveWorker, TaskPersister
from ..storage import FileKeyValueStorage
from ..store import TaskStore
from .keybindings import QUIT, KeybindingHandler
from .state import ViewState
from .tui_utils import KeyReader, cbreak_terminal, get_terminal_size
from .views.entry_row import render_entry_row
from .views.footer_bar import render_footer_bar
from .views.help_panel import render_help_panel
from .views.notice_dialog import render_notice_dialog
from .views.task_list_panel import render_task_list_panel, visible_window

logger = logging.getLogger(__name__)

HEADER_SIZE = 1
ENTRY_SIZE = 3
FOOTER_SIZE = 1
LIST_CHROME = 2


class TaskTakerApp:
    """Main TUI application orchestrating store, persistence and views."""

    def __init__(self, config: Config, console: Console | None = None):
        """Initialize TUI application.

        Args:
            config: Runtime configuration
            console: Console to render to (defaults to a new one)
        """
        self.config = config
        self.console = console or Console()

        self.store = TaskStore()
        self.view_state = ViewState()
        self.keybinding_handler = KeybindingHandler(self.view_state, self.store)

        self.notice_queue: queue.Queue[Notice] = queue.Queue()
        self.persister = TaskPersister(FileKeyValueStorage(config.storage_path))
        self.save_worker = SaveWorker(self.persister, self.notice_queue)
        self.store.subscribe(self.save_worker.submit)

        self.terminal_width, self.terminal_height = get_terminal_size()

    def load_tasks(self) -> None:
        """Hydrate the store from storage.

        A first run saves the empty collection once. A read failure leaves the
        store empty, queues a notice and skips the initial save. That does not
        protect the stored value for long: the first add, edit or remove saves
        over it whenever the storage file itself is still writable.
        """
        logger.info(f"Loading tasks from {self.config.storage_path}")
        try:
            tasks = self.persister.load()
        except PersistenceReadFailure as err:
            logger.error(f"Task load failed: {err}")
            self.notice_queue.put_nowait(Notice.load_failed())
            return

        if tasks is None:
            logger.info("No saved tasks found, starting empty")
            self.save_worker.submit(self.store.tasks)
            return

        self.store.hydrate(tasks)
        if tasks:
            self.view_state.selected_index = 0

    def process_notices(self) -> None:
        """Move all queued notices into view state."""
        try:
            while True:
                notice = self.notice_queue.get_nowait()
                logger.debug(f"Showing notice: {notice.message}")
                self.view_state.push_notice(notice)
        except queue.Empty:
            pass

    def handle_key(self, key: str) -> None:
        """Dispatch a key press and apply its feedback message."""
        handled, message = self.keybinding_handler.handle_key(key)
        if not handled:
            logger.debug(f"Unhandled key {key!r}")
            return

        if message == QUIT:
            self.view_state.should_quit = True
        elif message is not None:
            self.view_state.status_message = message

    @property
    def list_viewport_size(self) -> int:
        chrome = HEADER_SIZE + ENTRY_SIZE + FOOTER_SIZE + LIST_CHROME
        return max(1, self.terminal_height - chrome)

    def _build_layout(self) -> Layout:
        """Build the screen layout.

        Returns:
            Rich Layout with header, entry, main and footer regions
        """
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=HEADER_SIZE),
            Layout(name="entry", size=ENTRY_SIZE),
            Layout(name="main", ratio=1),
            Layout(name="footer", size=FOOTER_SIZE),
        )
        return layout

    def _render_layout(self, layout: Layout) -> None:
        """Render all regions into the layout."""
        layout["header"].update(Text(self.config.title, style="bold", justify="center"))
        layout["entry"].update(render_entry_row(self.store.entry_text, self.store.is_editing))

        notice = self.view_state.active_notice
        if notice is not None:
            layout["main"].update(render_notice_dialog(notice))
        elif self.view_state.help_panel_visible:
            layout["main"].update(render_help_panel())
        else:
            self.view_state.clamp_selection(len(self.store))
            self.view_state.scroll_offset, _ = visible_window(
                len(self.store),
                self.view_state.selected_index,
                self.view_state.scroll_offset,
                self.list_viewport_size,
            )
            layout["main"].update(
                render_task_list_panel(
                    self.store.tasks,
                    selected_index=self.view_state.selected_index,
                    editing_task_id=self.store.editing_task_id,
                    scroll_offset=self.view_state.scroll_offset,
                    viewport_size=self.list_viewport_size,
                )
            )

        layout["footer"].update(
            render_footer_bar(
                task_count=len(self.store),
                status_message=self.view_state.status_message,
                terminal_width=self.terminal_width,
            )
        )

    def run(self) -> int:
        """Run the main TUI event loop.

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        self.save_worker.start()
        try:
            self.load_tasks()
            layout = self._build_layout()
            key_reader = KeyReader()

            with cbreak_terminal(), Live(
                layout,
                console=self.console,
                refresh_per_second=self.config.refresh_per_second,
                screen=True,
            ) as live:
                logger.info("TUI main loop started")

                while not self.view_state.should_quit:
                    self.process_notices()
                    self.terminal_width, self.terminal_height = get_terminal_size()

                    for key in key_reader.read(timeout=1 / self.config.refresh_per_second):
                        self.handle_key(key)
                        if self.view_state.should_quit:
                            break

                    self._render_layout(layout)
                    live.update(layout)

            logger.info("TUI main loop exited")
            return 0

        except KeyboardInterrupt:
            logger.info("TUI interrupted by user")
            return 130

        finally:
            self.save_worker.stop()
            logger.info("TUI cleanup complete")
