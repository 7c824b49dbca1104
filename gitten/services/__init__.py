"""Services for gitten."""

from .registry import RepositoryRegistry
from .watcher import WatchEvent, WorkspaceWatcher

__all__ = ["RepositoryRegistry", "WatchEvent", "WorkspaceWatcher"]
