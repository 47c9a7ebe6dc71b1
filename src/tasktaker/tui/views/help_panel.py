"""Help panel renderer for keybinding reference."""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table


def render_help_panel() -> Panel:
    """Build Rich Panel displaying keybinding reference table.

    Returns:
        Rich Panel component with categorized keybindings
    """
    table = Table(
        show_header=True,
        header_style="bold magenta",
        border_style="blue",
        padding=(0, 1),
    )
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Action", style="yellow")
    table.add_column("Description", style="white")

    table.add_row("", "[bold cyan]Entry[/bold cyan]", "", style="bold")
    table.add_row("Type", "Edit text", "Type into the task field")
    table.add_row("Backspace", "Delete char", "Remove the last character")
    table.add_row("Ctrl+U", "Clear", "Clear the task field")
    table.add_row("Enter", "Add/Update", "Add a new task, or save the task being edited")

    table.add_row("", "", "")
    table.add_row("", "[bold green]List[/bold green]", "", style="bold")
    table.add_row("↑/↓", "Select", "Move the row selection")
    table.add_row("Ctrl+E", "Edit", "Load the selected task into the field")
    table.add_row("Ctrl+D/Del", "Delete", "Delete the selected task")

    table.add_row("", "", "")
    table.add_row("", "[bold magenta]Meta[/bold magenta]", "", style="bold")
    table.add_row("F1/Ctrl+G", "Help", "Toggle this help panel")
    table.add_row("ESC", "Close", "Close help or cancel editing")
    table.add_row("Ctrl+Q", "Quit", "Exit TaskTaker")

    return Panel(
        table,
        title="[bold white]Keybindings[/bold white]",
        border_style="blue",
        padding=(1, 2),
    )
