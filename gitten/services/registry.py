"""Repository registry: discovers workspace entries and keeps them current"""

import os
from typing import List, Optional, Tuple

import git

from gitten.constants import HIDDEN_PREFIX
from gitten.exceptions import WorkspaceScanError
from gitten.logging_config import get_logger
from gitten.models.workspace import WorkspaceEntry
from gitten.services.git.repository import RepositoryQueries

logger = get_logger(__name__)


def path_contains(parent: str, path: str) -> bool:
    """True when ``path`` is ``parent`` or lies somewhere below it."""
    parent = os.path.normpath(parent)
    path = os.path.normpath(path)
    return path == parent or path.startswith(parent.rstrip(os.sep) + os.sep)


class RepositoryRegistry:
    """Builds the ordered list of workspace entries and refreshes them in place.

    The registry keeps no state between calls. Entries are never added or
    removed after the initial scan: a repository deleted from disk stays
    listed, and new top-level folders appear only after a restart.
    """

    def __init__(self, queries: Optional[RepositoryQueries] = None):
        self.queries = queries or RepositoryQueries()

    def describe(self, path: str) -> Tuple[bool, str, int]:
        """Best-effort (is_repository, active_branch_name, changed_file_count)."""
        with self.queries.repository(path) as repo:
            if repo is None:
                return False, "", 0
            try:
                branch = self.queries.active_branch_name(repo)
            except (git.exc.GitError, ValueError, OSError) as e:
                logger.debug(f"Could not read active branch of {path}: {e}")
                branch = ""
            try:
                changed = self.queries.changed_file_count(repo)
            except (git.exc.GitError, ValueError, OSError) as e:
                logger.debug(f"Could not count changes in {path}: {e}")
                changed = 0
            return True, branch, changed

    def scan(self, root_path: str) -> List[WorkspaceEntry]:
        """List the immediate, non-hidden child directories of ``root_path``.

        Raises:
            WorkspaceScanError: The root cannot be listed
        """
        try:
            with os.scandir(root_path) as it:
                children = [
                    child for child in it
                    if not child.name.startswith(HIDDEN_PREFIX) and child.is_dir()
                ]
        except OSError as e:
            raise WorkspaceScanError(root_path, e.strerror or str(e)) from e

        entries = []
        for child in children:
            path = os.path.realpath(child.path)
            is_repository, branch, changed = self.describe(path)
            entries.append(
                WorkspaceEntry(
                    path=path,
                    display_name=child.name,
                    is_repository=is_repository,
                    active_branch_name=branch,
                    changed_file_count=changed,
                )
            )

        entries.sort(key=lambda entry: entry.display_name.lower())
        logger.info(
            f"Scanned {root_path}: {len(entries)} entries, "
            f"{sum(1 for e in entries if e.is_repository)} repositories"
        )
        return entries

    def refresh_entry(self, entry: WorkspaceEntry) -> bool:
        """Re-derive one entry. Fields are only written when something changed."""
        is_repository, branch, changed = self.describe(entry.path)
        if (
            entry.is_repository == is_repository
            and entry.active_branch_name == branch
            and entry.changed_file_count == changed
        ):
            return False

        entry.is_repository = is_repository
        entry.active_branch_name = branch
        entry.changed_file_count = changed
        logger.debug(f"Refreshed {entry.display_name}: branch={branch!r} changed={changed}")
        return True

    def refresh(self, entries: List[WorkspaceEntry], changed_path: str) -> List[WorkspaceEntry]:
        """Refresh every entry that contains ``changed_path``.

        Returns:
            The entries whose fields actually changed
        """
        return [
            entry for entry in entries
            if path_contains(entry.path, changed_path) and self.refresh_entry(entry)
        ]
