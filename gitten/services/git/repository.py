"""Read-only repository queries"""

import fnmatch
from contextlib import contextmanager
from typing import Iterator, List, Optional, Union, TYPE_CHECKING

import git

from gitten.constants import DETACHED_HEAD_NAME
from gitten.formatters.history import format_history
from gitten.logging_config import get_logger

if TYPE_CHECKING:
    from gitten.config import Config

logger = get_logger(__name__)


class RepositoryQueries:
    """Queries against a version-control working copy.

    Holds configuration only; every call works on the repository handle it
    is given.
    """

    def __init__(self, config: Union["Config", dict, None] = None):
        self.config = config or {}
        self.tag_pattern = self.config.get("tag_pattern", None)
        self.history_limit = self.config.get("history_limit", 100)

    def open_repository(self, path: str) -> Optional[git.Repo]:
        """Open ``path`` as a working copy, or None when it is not one.

        Parent directories are not searched, so a plain folder nested in a
        repository is not mistaken for it.
        """
        try:
            return git.Repo(path)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
            return None
        except Exception as e:
            logger.debug(f"Could not open {path} as a repository: {e}")
            return None

    @contextmanager
    def repository(self, path: str) -> Iterator[Optional[git.Repo]]:
        """Open ``path`` for the duration of a block and release its handles."""
        repo = self.open_repository(path)
        try:
            yield repo
        finally:
            if repo is not None:
                repo.close()

    def list_branches(self, repo: git.Repo) -> List[str]:
        """Local branch names followed by remote-tracking branch names."""
        names = [head.name for head in repo.heads]
        for ref in repo.refs:
            if isinstance(ref, git.RemoteReference) and ref.remote_head != "HEAD":
                names.append(ref.name)
        return names

    def list_tags(self, repo: git.Repo, pattern: Optional[str] = None) -> List[str]:
        """Tag names, optionally filtered by a glob such as ``v*.*.*``."""
        pattern = pattern or self.tag_pattern
        names = [tag.name for tag in repo.tags]
        if pattern:
            names = [name for name in names if fnmatch.fnmatchcase(name, pattern)]
        return names

    def active_branch_name(self, repo: git.Repo) -> str:
        """Short name of the checked-out branch.

        Returns "" for an unborn HEAD (no commits yet) and "HEAD" when
        detached.
        """
        head = repo.head
        if head.is_detached:
            return DETACHED_HEAD_NAME
        if not head.is_valid():
            return ""
        return head.reference.name

    def head_branch_name(self, repo: git.Repo) -> Optional[str]:
        """Branch HEAD points to, even if it has no commits yet.

        None when HEAD is detached.
        """
        try:
            return repo.head.reference.name
        except TypeError:
            return None

    def changed_file_count(self, repo: git.Repo) -> int:
        """Number of files that differ between the index and the working tree."""
        return len(repo.index.diff(None))

    def read_history(self, repo: git.Repo, limit: Optional[int] = None) -> str:
        """Commit log of HEAD formatted like ``git log``."""
        commits = repo.iter_commits(max_count=limit or self.history_limit)
        return format_history(commits)
