"""Keyboard input handling for the TUI.

This module maps key names (as produced by tui_utils.parse_keys) to user
intents: editing the entry buffer, submitting, selecting rows, editing and
deleting tasks, and meta commands.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import Task
    from ..store import TaskStore
    from .state import ViewState

logger = logging.getLogger(__name__)

QUIT = "quit"


class KeybindingHandler:
    """Handles keyboard input and dispatches actions to the task store."""

    def __init__(self, view_state: ViewState, store: TaskStore) -> None:
        """Initialize keybinding handler.

        Args:
            view_state: Presentation state for selection and panels
            store: Task store receiving user intents
        """
        self.view_state = view_state
        self.store = store

    def handle_key(self, key: str) -> tuple[bool, str | None]:
        """Process a key press and execute the corresponding action.

        Args:
            key: Key name (e.g., "a", "enter", "up", "ctrl+e")

        Returns:
            Tuple of (handled, message):
                - handled: True if key was recognized and handled, False otherwise
                - message: Optional feedback message, or "quit" to exit
        """
        # A visible notice swallows the next key press
        if self.view_state.active_notice is not None:
            self.view_state.dismiss_notice()
            return True, None

        if key == "ctrl+q":
            return True, QUIT
        if key in ("f1", "ctrl+g"):
            return self._handle_toggle_help()
        if key == "escape":
            return self._handle_escape()

        # Entry row
        if key == "enter":
            return self._handle_submit()
        if key == "backspace":
            return self._handle_backspace()
        if key == "ctrl+u":
            self.store.set_entry_text("")
            return True, None

        # List
        if key == "up":
            return self._handle_move_up()
        if key == "down":
            return self._handle_move_down()
        if key == "ctrl+e":
            return self._handle_begin_edit()
        if key in ("ctrl+d", "delete"):
            return self._handle_remove()

        if len(key) == 1 and key.isprintable():
            self.store.set_entry_text(self.store.entry_text + key)
            return True, None

        return False, None

    # Entry row handlers

    def _handle_submit(self) -> tuple[bool, str | None]:
        """Add or update depending on whether a task is being edited."""
        text = self.store.entry_text
        if self.store.is_editing:
            self.store.update_task(text)
            return True, "Task updated"

        task = self.store.add_task(text)
        if task is None:
            return True, None
        self.view_state.selected_index = len(self.store) - 1
        return True, "Task added"

    def _handle_backspace(self) -> tuple[bool, str | None]:
        text = self.store.entry_text
        if text:
            self.store.set_entry_text(text[:-1])
        return True, None

    # List handlers

    def _handle_move_up(self) -> tuple[bool, str | None]:
        count = len(self.store)
        if count == 0:
            return True, None

        index = self.view_state.selected_index
        self.view_state.selected_index = count - 1 if index is None else max(0, index - 1)
        return True, None

    def _handle_move_down(self) -> tuple[bool, str | None]:
        count = len(self.store)
        if count == 0:
            return True, None

        index = self.view_state.selected_index
        self.view_state.selected_index = 0 if index is None else min(count - 1, index + 1)
        return True, None

    def _selected_task(self) -> Task | None:
        self.view_state.clamp_selection(len(self.store))
        index = self.view_state.selected_index
        if index is None:
            return None
        return self.store.tasks[index]

    def _handle_begin_edit(self) -> tuple[bool, str | None]:
        task = self._selected_task()
        if task is None:
            return True, "No task selected"

        self.store.begin_edit(task)
        return True, None

    def _handle_remove(self) -> tuple[bool, str | None]:
        task = self._selected_task()
        if task is None:
            return True, "No task selected"

        self.store.remove_task(task.id)
        self.view_state.clamp_selection(len(self.store))
        return True, "Task deleted"

    # Meta handlers

    def _handle_toggle_help(self) -> tuple[bool, str | None]:
        self.view_state.help_panel_visible = not self.view_state.help_panel_visible
        return True, None

    def _handle_escape(self) -> tuple[bool, str | None]:
        """Close help if open, otherwise leave edit mode."""
        if self.view_state.help_panel_visible:
            self.view_state.help_panel_visible = False
            return True, None

        if self.store.is_editing:
            self.store.cancel_edit()
            return True, "Edit cancelled"

        return True, None
