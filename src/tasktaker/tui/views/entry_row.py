"""Entry row renderer: the text field and its contextual action badge.

The badge switches between add-mode and update-mode based solely on whether
a task is being edited.
"""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

PLACEHOLDER = "Enter Task"
ADD_LABEL = "+ Add"
UPDATE_LABEL = "✓ Update"


def action_label(is_editing: bool) -> str:
    """Return the action badge label for the current mode."""
    return UPDATE_LABEL if is_editing else ADD_LABEL


def render_entry_row(entry_text: str, is_editing: bool) -> Panel:
    """Build Rich Panel with the entry buffer and action badge.

    Args:
        entry_text: Current contents of the entry buffer
        is_editing: Whether a task is being edited

    Returns:
        Rich Panel component ready for rendering
    """
    field = Text()
    if entry_text:
        field.append(entry_text, style="white")
    else:
        field.append(PLACEHOLDER, style="dim italic")
    field.append("▏", style="bold cyan")

    badge = Text(f" {action_label(is_editing)} ", style="bold white on #3b5998")

    row = Table.grid(expand=True)
    row.add_column(ratio=1)
    row.add_column(justify="right", no_wrap=True)
    row.add_row(field, badge)

    border = "yellow" if is_editing else "blue"
    title = "[bold yellow]Editing[/bold yellow]" if is_editing else None
    return Panel(row, title=title, border_style=border, padding=(0, 1))
