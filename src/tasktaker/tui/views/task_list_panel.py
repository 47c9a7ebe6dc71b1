"""Task list panel renderer.

This module provides the render_task_list_panel function that displays
every task in collection order, each with its edit and delete affordances.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ...models import Task

EDIT_ICON = "✎"
DELETE_ICON = "✗"


def visible_window(
    total: int, selected_index: int | None, scroll_offset: int, viewport_size: int | None
) -> tuple[int, int]:
    """Compute the [start, end) slice of rows to show.

    The window keeps the selected row visible, moving scroll_offset only as
    far as needed.

    Args:
        total: Number of tasks
        selected_index: Selected row, if any
        scroll_offset: Current first visible row
        viewport_size: Maximum rows to show (None = show all)

    Returns:
        Tuple of (start, end) indices
    """
    if not viewport_size or viewport_size <= 0 or total <= viewport_size:
        return 0, total

    start = max(0, min(scroll_offset, total - viewport_size))
    if selected_index is not None:
        if selected_index < start:
            start = selected_index
        elif selected_index >= start + viewport_size:
            start = selected_index - viewport_size + 1
    return start, start + viewport_size


def render_task_list_panel(
    tasks: Sequence[Task],
    selected_index: int | None = None,
    editing_task_id: str | None = None,
    scroll_offset: int = 0,
    viewport_size: int | None = None,
) -> Panel:
    """Build Rich Panel displaying the task list.

    Args:
        tasks: Tasks in collection order
        selected_index: Index of the highlighted row, if any
        editing_task_id: Id of the task being edited, if any
        scroll_offset: Number of rows skipped from the top
        viewport_size: Maximum number of rows to show (None = show all)

    Returns:
        Rich Panel component with task list
    """
    table = Table(
        show_header=False,
        border_style="blue",
        padding=(0, 1),
        expand=True,
        show_edge=False,
    )
    table.add_column("Task", style="white", ratio=1)
    table.add_column("Actions", no_wrap=True, justify="right", width=7)

    start, end = visible_window(len(tasks), selected_index, scroll_offset, viewport_size)

    for index in range(start, end):
        task = tasks[index]
        label = Text(task.text)
        if task.id == editing_task_id:
            label.stylize("italic yellow")

        actions = Text()
        actions.append(EDIT_ICON, style="blue")
        actions.append("  ")
        actions.append(DELETE_ICON, style="red")

        style = "reverse" if index == selected_index else None
        table.add_row(label, actions, style=style)

    if not tasks:
        table.add_row("[dim italic]No tasks yet[/dim italic]", "")

    count = f"[dim]({len(tasks)})[/dim]"
    if viewport_size and len(tasks) > viewport_size:
        count = f"[dim]({start + 1}-{end}/{len(tasks)})[/dim]"

    return Panel(
        table,
        title=f"[bold white]Tasks[/bold white] {count}",
        border_style="blue",
        padding=(0, 1),
    )
