"""Text command interpreter"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

import git

from gitten.constants import (
    MSG_EMPTY_COMMAND,
    MSG_NOT_A_REPOSITORY,
    MSG_REPOSITORY_REQUIRED,
    MSG_UNKNOWN_COMMAND,
)
from gitten.exceptions import (
    GitOperationError,
    GittenError,
    InvalidCommandError,
    NotARepositoryError,
)
from gitten.logging_config import get_logger
from gitten.models.outcome import CommandResult, SyncResult
from gitten.models.selection import SelectionContext
from gitten.models.workspace import WorkspaceEntry
from gitten.services.git.sync import SyncEngine

logger = get_logger(__name__)


@dataclass
class CommandContext:
    """What was selected when the command line was confirmed."""
    selection: SelectionContext
    entry: Optional[WorkspaceEntry]
    branch: Optional[str] = None
    tag: Optional[str] = None


Handler = Callable[[git.Repo, List[str], CommandContext], CommandResult]


def _required(args: List[str], what: str) -> str:
    if not args:
        raise InvalidCommandError(f"{what} must not be empty")
    return args[0]


class CommandInterpreter:
    """Tokenizes a command line and dispatches it to the SyncEngine.

    The verb table depends on the selection context. Exactly one command
    runs per line, and every call returns exactly one result message.
    """

    def __init__(self, sync: SyncEngine):
        self.sync = sync
        self._handlers: Dict[Tuple[SelectionContext, str], Handler] = {
            (SelectionContext.REPOSITORIES, "co"): self._checkout,
            (SelectionContext.REPOSITORIES, "tag"): self._tag,
            (SelectionContext.REPOSITORIES, "rh"): self._reset,
            (SelectionContext.REPOSITORIES, "pull"): self._pull,
            (SelectionContext.REPOSITORIES, "fetch"): self._fetch,
            (SelectionContext.BRANCHES, "push"): self._push_branch,
            (SelectionContext.TAGS, "push"): self._push_tag,
        }

    def verbs(self, selection: SelectionContext) -> List[str]:
        return [verb for context, verb in self._handlers if context is selection]

    def execute(self, line: str, context: CommandContext) -> CommandResult:
        """Run one command line against the selected repository."""
        entry = context.entry
        if entry is None:
            return CommandResult(MSG_REPOSITORY_REQUIRED, ok=False)
        if not entry.is_repository:
            return CommandResult(MSG_NOT_A_REPOSITORY, ok=False)

        tokens = line.split()
        try:
            if not tokens:
                raise InvalidCommandError(MSG_EMPTY_COMMAND)
            verb, args = tokens[0], tokens[1:]
            handler = self._handlers.get((context.selection, verb))
            if handler is None:
                raise InvalidCommandError(MSG_UNKNOWN_COMMAND)

            logger.info(f"{entry.display_name}: {' '.join(tokens)}")
            with self.sync.repository(entry.path) as repo:
                if repo is None:
                    raise NotARepositoryError(entry.path)
                return handler(repo, args, context)
        except InvalidCommandError as e:
            return CommandResult(e.message, ok=False)
        except GittenError as e:
            logger.warning(f"Command {line!r} failed: {e}")
            return CommandResult(f"Error: {e}", ok=False)
        except (git.exc.GitError, ValueError, OSError) as e:
            logger.error(f"Command {line!r} failed: {e}", exc_info=True)
            return CommandResult(f"Error: {e}", ok=False)

    def _checkout(self, repo: git.Repo, args: List[str], context: CommandContext) -> CommandResult:
        branch = _required(args, "Branch name")
        result = self.sync.checkout_branch(repo, branch)
        return CommandResult(result.message, refresh_refs=True)

    def _tag(self, repo: git.Repo, args: List[str], context: CommandContext) -> CommandResult:
        tag = _required(args, "Tag name")
        result = self.sync.create_tag(repo, tag)
        return CommandResult(result.message, refresh_refs=True)

    def _reset(self, repo: git.Repo, args: List[str], context: CommandContext) -> CommandResult:
        result = self.sync.hard_reset(repo)
        return CommandResult(result.message)

    def _pull(self, repo: git.Repo, args: List[str], context: CommandContext) -> CommandResult:
        remote = _required(args, "Remote name")
        branch = self.sync.head_branch_name(repo)
        if branch is None:
            raise GitOperationError("pull", remote, "HEAD is detached")
        result: SyncResult = self.sync.fetch(repo, remote, branch)
        return CommandResult(result.message, refresh_refs=True)

    def _fetch(self, repo: git.Repo, args: List[str], context: CommandContext) -> CommandResult:
        remote = _required(args, "Remote name")
        result = self.sync.fetch_all_refs(repo, remote)
        return CommandResult(result.message, refresh_refs=True)

    def _push_branch(self, repo: git.Repo, args: List[str], context: CommandContext) -> CommandResult:
        remote = _required(args, "Remote name")
        if context.branch is None:
            raise InvalidCommandError("Please select a branch!")
        result = self.sync.push(repo, remote, f"refs/heads/{context.branch}")
        return CommandResult(result.message)

    def _push_tag(self, repo: git.Repo, args: List[str], context: CommandContext) -> CommandResult:
        remote = _required(args, "Remote name")
        if context.tag is None:
            raise InvalidCommandError("Please select a tag!")
        result = self.sync.push(repo, remote, f"refs/tags/{context.tag}")
        return CommandResult(result.message)
