"""Help and prompt line formatting."""

from typing import Optional

from gitten.constants import HELP_NON_REPOSITORY, HELP_REFS, HELP_REPOSITORIES
from gitten.models.selection import InputMode, SelectionContext


def format_help(context: SelectionContext, entry) -> str:
    """
    Context help for the bottom line.

    Args:
        context: Active selection context
        entry: Selected WorkspaceEntry, or None

    Returns:
        Help text; empty when nothing is selected
    """
    if entry is None:
        return ""
    if context is SelectionContext.REPOSITORIES:
        return HELP_REPOSITORIES if entry.is_repository else HELP_NON_REPOSITORY
    return HELP_REFS


def format_prompt(mode: InputMode, context: SelectionContext, buffer: str) -> Optional[str]:
    """Prompt line for text-entry modes, None in the other modes."""
    if mode is InputMode.COMMAND_LINE:
        return f"{context.value} > {buffer}"
    if mode is InputMode.SEARCH:
        return f"Search > {buffer}"
    if mode is InputMode.RUN_COMMAND:
        return f"Command > {buffer}"
    if mode is InputMode.LOG_VIEW:
        return "Logs"
    return None
