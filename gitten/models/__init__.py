"""Data models for gitten."""

from .input import InputEvent, KeyKind
from .log import LogEntry, RepositoryHistory
from .outcome import CommandResult, MergeOutcome, SyncResult
from .selection import InputMode, SelectionContext, SelectionList
from .workspace import ListItemRenderable, RefName, WorkspaceEntry

__all__ = [
    "InputEvent",
    "KeyKind",
    "LogEntry",
    "RepositoryHistory",
    "CommandResult",
    "MergeOutcome",
    "SyncResult",
    "InputMode",
    "SelectionContext",
    "SelectionList",
    "ListItemRenderable",
    "RefName",
    "WorkspaceEntry",
]
