"""Modal notice renderer."""

from __future__ import annotations

from rich.align import Align
from rich.panel import Panel
from rich.text import Text

from ...models import Notice


def render_notice_dialog(notice: Notice) -> Align:
    """Build a centered Rich Panel showing a notice.

    Args:
        notice: Notice to display

    Returns:
        Renderable centering the dialog on screen
    """
    body = Text(notice.message, justify="center")
    body.append("\n\n")
    body.append("Press any key to dismiss", style="dim")

    panel = Panel(
        body,
        title=f"[bold red]{notice.title}[/bold red]",
        border_style="red",
        padding=(1, 4),
        width=44,
    )
    return Align.center(panel, vertical="middle")
