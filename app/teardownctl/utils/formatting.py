"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

if TYPE_CHECKING:
    from teardownctl.cleanup.models import MountRecord, OwnershipDecision

# Semantic styles shared by every command
THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "header": "#69B9A1",
        "bold_header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
        "dim": "#b2bec3",
        "mount.owned": "bold #f53263",
        "mount.root": "#f5b332",
        "mount.unrelated": "#b2bec3",
    }
)

_DECISION_STYLES: dict[str, str] = {
    "owned": "mount.owned",
    "data_dir_root": "mount.root",
    "unrelated": "mount.unrelated",
}


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def create_mount_table(title: str = "Mount Points") -> Table:
    """Create a pre-configured table for displaying mount points.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for mount display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", justify="right", style="muted", width=4)
    table.add_column("Mount Point", no_wrap=True)
    table.add_column("Type", style="muted")
    table.add_column("Device", style="muted", overflow="ellipsis")
    table.add_column("Decision")
    return table


def format_mount_row(
    index: int,
    record: MountRecord,
    decision: OwnershipDecision,
) -> tuple[str, str, str, str, str]:
    """Format a mount record as a table row with styling by decision.

    Args:
        index: Position in unmount order (1-based).
        record: The mount record to format.
        decision: Ownership decision for the record.

    Returns:
        Tuple of (index, path, fstype, device, decision) with Rich markup.
    """
    style = _DECISION_STYLES.get(decision.value, "text")
    return (
        str(index),
        f"[{style}]{escape(record.path)}[/]",
        record.fstype,
        escape(record.device),
        f"[{style}]{decision.value}[/]",
    )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
