"""Footer bar renderer for status indicators.

This module provides the render_footer_bar function that displays
a status bar with the task count, the last status message, and help hints.
"""

from __future__ import annotations

from rich.text import Text

from ..tui_utils import truncate_text

HELP_HINT = "F1 for help"


def render_footer_bar(
    task_count: int,
    status_message: str | None = None,
    terminal_width: int = 80,
) -> Text:
    """Build Rich Text displaying footer status bar.

    Args:
        task_count: Number of tasks in the list
        status_message: Feedback from the last action, if any
        terminal_width: Terminal width for truncation calculations

    Returns:
        Rich Text component ready for rendering
    """
    parts = []

    if task_count == 0:
        parts.append(("No tasks", "dim"))
    else:
        parts.append((f"{task_count} task" if task_count == 1 else f"{task_count} tasks", "green"))

    if status_message:
        # Format: "[count] | [message] | F1 for help"
        separator_width = 6
        available_width = terminal_width - len(parts[0][0]) - len(HELP_HINT) - separator_width
        if available_width > 10:
            parts.append((" | ", "dim"))
            parts.append((truncate_text(status_message, available_width), "yellow"))

    parts.append((" | ", "dim"))
    parts.append((HELP_HINT, "cyan"))

    footer = Text()
    for text, style in parts:
        footer.append(text, style=style)

    return footer
