"""Workspace entry and reference name models"""
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from rich.text import Text


@runtime_checkable
class ListItemRenderable(Protocol):
    """Anything a list panel can draw as a single row."""

    def to_list_item(self, width: int) -> Text:
        ...


@dataclass
class WorkspaceEntry:
    """One directory under the workspace root, possibly a repository."""
    path: str  # absolute, resolved
    display_name: str
    is_repository: bool = False
    active_branch_name: str = ""  # "" = not a repository or unborn HEAD
    changed_file_count: int = 0

    def __str__(self) -> str:
        return self.display_name

    @property
    def has_changes(self) -> bool:
        return self.changed_file_count > 0

    def to_list_item(self, width: int) -> Text:
        from gitten.formatters import format_entry_row
        return format_entry_row(self, width)


class RefName(str):
    """A branch or tag name as shown in the branch and tag panels."""

    def to_list_item(self, width: int) -> Text:
        from gitten.formatters import format_ref_row
        return format_ref_row(self, width)
