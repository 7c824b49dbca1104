"""List row formatting for the repository, branch, tag and log panels."""

from rich.text import Text

from gitten.constants import (
    SYMBOL_CHANGED,
    SYMBOL_UNCHANGED,
    TUI_COLORS,
    UNBORN_BRANCH_LABEL,
)
from gitten.models.log import LogEntry


def format_branch_label(entry) -> str:
    """
    Format the parenthesised branch marker of a repository row.

    Args:
        entry: WorkspaceEntry to describe

    Returns:
        "(branch)" or "(branch*)" when files changed; "(empty)" for unborn HEAD
    """
    branch = entry.active_branch_name or UNBORN_BRANCH_LABEL
    marker = SYMBOL_CHANGED if entry.has_changes else SYMBOL_UNCHANGED
    return f"({branch}{marker})"


def format_entry_row(entry, width: int) -> Text:
    """
    Format a workspace entry as one list row.

    Repositories are right-aligned with their branch label and drawn green;
    plain folders show their name only.

    Args:
        entry: WorkspaceEntry to render
        width: Available width in cells

    Returns:
        Rich Text for the row
    """
    if not entry.is_repository:
        return Text(entry.display_name, style=TUI_COLORS["folder"])

    label = format_branch_label(entry)
    padding = max(width - len(entry.display_name) - len(label), 1)
    return Text(
        f"{entry.display_name}{' ' * padding}{label}",
        style=TUI_COLORS["repository"],
    )


def format_ref_row(name: str, width: int) -> Text:
    """Format a branch or tag name as one list row."""
    return Text(str(name), no_wrap=True, overflow="ellipsis")


def format_log_entry(entry: LogEntry) -> str:
    """Format a session log entry with its time of day."""
    return f"{entry.timestamp:%H:%M:%S} {entry}"
