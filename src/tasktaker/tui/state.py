"""View state for the TUI.

Task data and the edit session live in TaskStore; this module only holds
what the screen needs on top of it: row selection, the active notice and
panel visibility.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from ..models import Notice


@dataclass
class ViewState:
    """Presentation-only state owned by the TUI app."""

    selected_index: int | None = None
    scroll_offset: int = 0
    help_panel_visible: bool = False
    status_message: str | None = None
    should_quit: bool = False
    pending_notices: deque[Notice] = field(default_factory=deque)

    @property
    def active_notice(self) -> Notice | None:
        """Notice currently displayed as a modal, if any."""
        return self.pending_notices[0] if self.pending_notices else None

    def push_notice(self, notice: Notice) -> None:
        self.pending_notices.append(notice)

    def dismiss_notice(self) -> None:
        if self.pending_notices:
            self.pending_notices.popleft()

    def clamp_selection(self, task_count: int) -> None:
        """Keep the selected row inside the task list."""
        if task_count == 0:
            self.selected_index = None
        elif self.selected_index is not None:
            self.selected_index = max(0, min(self.selected_index, task_count - 1))

    def __repr__(self) -> str:
        return (
            f"ViewState(selected={self.selected_index}, "
            f"notices={len(self.pending_notices)}, help={self.help_panel_visible})"
        )
