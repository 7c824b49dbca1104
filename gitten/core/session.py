"""Session controller: selection state machine and event loop glue"""

from typing import List, Optional, Union

import git

from gitten.config import Config
from gitten.constants import MSG_NO_LOGS, MSG_REPOSITORY_REQUIRED
from gitten.core.commands import CommandContext, CommandInterpreter
from gitten.exceptions import InvalidCommandError
from gitten.formatters import format_help, format_prompt
from gitten.logging_config import get_logger
from gitten.models.input import InputEvent, KeyKind
from gitten.models.log import LogEntry, RepositoryHistory
from gitten.models.selection import InputMode, SelectionContext, SelectionList
from gitten.models.workspace import RefName, WorkspaceEntry
from gitten.services.git.sync import SyncEngine
from gitten.services.process import run_with_path
from gitten.services.registry import RepositoryRegistry
from gitten.services.watcher import WorkspaceWatcher

logger = get_logger(__name__)

CONTEXT_KEYS = {
    "r": SelectionContext.REPOSITORIES,
    "t": SelectionContext.TAGS,
    "b": SelectionContext.BRANCHES,
}
LOG_VIEW_EXIT_KEYS = ("q", "l")


class SessionController:
    """Owns the three selection lists, the input mode and the session log.

    Each loop iteration applies at most one filesystem event
    (``poll_filesystem``) and at most one key event (``handle_input``).
    Branch and tag lists are rebuilt synchronously whenever the repository
    cursor moves, so they never describe a stale repository.
    """

    def __init__(
        self,
        config: Union[Config, dict],
        registry: Optional[RepositoryRegistry] = None,
        sync: Optional[SyncEngine] = None,
        watcher: Optional[WorkspaceWatcher] = None,
    ):
        """Scan the workspace and build the initial state.

        Args:
            config: Configuration dict or Config object
            registry: Registry used for the scan and refreshes
            sync: Engine behind the command interpreter
            watcher: Source of filesystem events (None = no live refresh)

        Raises:
            WorkspaceScanError: The root directory cannot be listed
        """
        if isinstance(config, dict):
            config = Config.from_dict(config)
        self.config = config
        self.root_path = config.root_path
        self.sync = sync or SyncEngine(config)
        self.registry = registry or RepositoryRegistry(self.sync)
        self.interpreter = CommandInterpreter(self.sync)
        self.watcher = watcher

        self.repositories: SelectionList[WorkspaceEntry] = SelectionList(
            self.registry.scan(self.root_path)
        )
        self.branches: SelectionList[RefName] = SelectionList()
        self.tags: SelectionList[RefName] = SelectionList()
        self.logs: List[LogEntry] = []

        self.selection = SelectionContext.REPOSITORIES
        self.input_mode = InputMode.NORMAL
        self.input = ""
        self.repository_history: Optional[RepositoryHistory] = None
        self.quit_requested = False

    # -- state queries -------------------------------------------------

    @property
    def selected_repository(self) -> Optional[WorkspaceEntry]:
        return self.repositories.selected

    @property
    def active_list(self) -> SelectionList:
        if self.selection is SelectionContext.BRANCHES:
            return self.branches
        if self.selection is SelectionContext.TAGS:
            return self.tags
        return self.repositories

    def help_text(self) -> str:
        return format_help(self.selection, self.selected_repository)

    def prompt_text(self) -> Optional[str]:
        return format_prompt(self.input_mode, self.selection, self.input)

    # -- session log ---------------------------------------------------

    def add_log(self, message: str) -> LogEntry:
        """Append one line, prefixed with the selected repository and branch."""
        entry = self.selected_repository
        if entry is not None:
            log_entry = LogEntry(message, entry.display_name, entry.active_branch_name)
        else:
            log_entry = LogEntry(message)
        self.logs.append(log_entry)
        logger.info(str(log_entry))
        return log_entry

    # -- selection -----------------------------------------------------

    def change_selection(self, selection: SelectionContext) -> None:
        self.selection = selection

    def next(self) -> None:
        self._move(self.active_list.next)

    def previous(self) -> None:
        self._move(self.active_list.previous)

    def _move(self, step) -> None:
        before = self.repositories.cursor
        step()
        if self.repositories.cursor != before:
            self.update_repository_details()

    def unselect_repository(self) -> None:
        if self.repositories.cursor is not None:
            self.repositories.unselect()
            self.update_repository_details()

    def update_repository_details(self) -> None:
        """Rebuild the branch and tag lists for the selected repository."""
        self.branches.unselect()
        self.tags.unselect()
        branches: List[RefName] = []
        tags: List[RefName] = []

        entry = self.selected_repository
        if entry is not None and entry.is_repository:
            with self.sync.repository(entry.path) as repo:
                if repo is not None:
                    try:
                        branches = [RefName(name) for name in self.sync.list_branches(repo)]
                        tags = [RefName(name) for name in self.sync.list_tags(repo)]
                    except (git.exc.GitError, ValueError, OSError) as e:
                        logger.warning(f"Could not list refs of {entry.display_name}: {e}")

        self.branches.replace(branches)
        self.tags.replace(tags)

    def search(self) -> None:
        self._move(lambda: self.active_list.search(self.input))

    # -- filesystem events ----------------------------------------------

    def poll_filesystem(self) -> List[WorkspaceEntry]:
        """Apply at most one pending watcher event.

        Returns:
            Entries whose state changed
        """
        if self.watcher is None:
            return []
        event = self.watcher.poll()
        if event is None or event.first_path is None:
            return []
        return self.apply_filesystem_change(event.first_path)

    def apply_filesystem_change(self, path: str) -> List[WorkspaceEntry]:
        try:
            changed = self.registry.refresh(self.repositories.items, path)
        except OSError as e:
            logger.warning(f"Refresh after change in {path} failed: {e}")
            return []
        if changed:
            logger.debug(f"{path} changed {[entry.display_name for entry in changed]}")
        return changed

    # -- input ---------------------------------------------------------

    def reset_input(self) -> None:
        self.input = ""
        self.input_mode = InputMode.NORMAL

    def handle_input(self, event: InputEvent) -> None:
        """Apply one key event according to the current input mode."""
        handlers = {
            InputMode.NORMAL: self._handle_normal,
            InputMode.COMMAND_LINE: self._handle_command_line,
            InputMode.SEARCH: self._handle_search,
            InputMode.LOG_VIEW: self._handle_log_view,
            InputMode.RUN_COMMAND: self._handle_run_command,
        }
        handlers[self.input_mode](event)

    def step(self, event: Optional[InputEvent] = None) -> None:
        """One loop iteration: one filesystem event, then one key event."""
        self.poll_filesystem()
        if event is not None:
            self.handle_input(event)

    def _repository_selected(self) -> bool:
        entry = self.selected_repository
        return entry is not None and entry.is_repository

    def _handle_normal(self, event: InputEvent) -> None:
        if event.kind is KeyKind.DOWN:
            self.next()
        elif event.kind is KeyKind.UP:
            self.previous()
        elif event.kind is KeyKind.LEFT:
            self.unselect_repository()
        elif event.kind is not KeyKind.CHAR:
            return
        elif event.char == "q":
            self.quit_requested = True
        elif event.char in CONTEXT_KEYS:
            self.change_selection(CONTEXT_KEYS[event.char])
        elif event.char == ":":
            if self._repository_selected():
                self.input_mode = InputMode.COMMAND_LINE
            else:
                self.add_log(MSG_REPOSITORY_REQUIRED)
        elif event.char == "/":
            self.input_mode = InputMode.SEARCH
        elif event.char == "l":
            if self._repository_selected():
                self.input_mode = InputMode.LOG_VIEW
        elif event.char == "$":
            if self.selected_repository is not None and self.selection is SelectionContext.REPOSITORIES:
                self.input_mode = InputMode.RUN_COMMAND
            else:
                self.add_log(MSG_REPOSITORY_REQUIRED)

    def _edit_buffer(self, event: InputEvent) -> bool:
        """Shared buffer editing. Returns True if the event was consumed."""
        if event.kind is KeyKind.CHAR and event.char:
            self.input += event.char
            return True
        if event.kind is KeyKind.BACKSPACE:
            self.input = self.input[:-1]
            return True
        return False

    def _handle_command_line(self, event: InputEvent) -> None:
        if event.kind is KeyKind.ENTER:
            self.process_input()
        elif event.kind is KeyKind.ESCAPE:
            self.reset_input()
        else:
            self._edit_buffer(event)

    def _handle_search(self, event: InputEvent) -> None:
        if event.kind in (KeyKind.ENTER, KeyKind.ESCAPE):
            self.reset_input()
        elif self._edit_buffer(event) and event.kind is KeyKind.CHAR:
            self.search()

    def _handle_log_view(self, event: InputEvent) -> None:
        if event.kind is KeyKind.DOWN:
            self.scroll_logs_down()
        elif event.kind is KeyKind.UP:
            self.scroll_logs_up()
        elif event.kind is KeyKind.ESCAPE or (
            event.kind is KeyKind.CHAR and event.char in LOG_VIEW_EXIT_KEYS
        ):
            self.repository_history = None
            self.reset_input()

    def _handle_run_command(self, event: InputEvent) -> None:
        if event.kind is KeyKind.ENTER:
            self.run_command_with_path()
            self.reset_input()
        elif event.kind is KeyKind.ESCAPE:
            self.reset_input()
        else:
            self._edit_buffer(event)

    # -- commands ------------------------------------------------------

    def process_input(self) -> None:
        """Hand the buffered line to the interpreter and log its outcome."""
        line = self.input
        self.reset_input()

        context = CommandContext(
            selection=self.selection,
            entry=self.selected_repository,
            branch=self.branches.selected,
            tag=self.tags.selected,
        )
        result = self.interpreter.execute(line, context)

        entry = self.selected_repository
        if result.ok and entry is not None:
            self.registry.refresh_entry(entry)
            if result.refresh_refs:
                self.update_repository_details()
        self.add_log(result.message)

    def run_command_with_path(self) -> None:
        entry = self.selected_repository
        if entry is None:
            self.add_log(MSG_REPOSITORY_REQUIRED)
            return
        try:
            message = run_with_path(self.input, entry.path)
        except InvalidCommandError as e:
            message = e.message
        self.add_log(message)

    # -- log viewer ----------------------------------------------------

    def history(self) -> Optional[RepositoryHistory]:
        """Commit log of the selected repository, loaded on first use."""
        if self.input_mode is not InputMode.LOG_VIEW:
            return None
        if self.repository_history is None:
            self.repository_history = RepositoryHistory(self._read_history())
        return self.repository_history

    def _read_history(self) -> str:
        entry = self.selected_repository
        if entry is None:
            return MSG_NO_LOGS
        with self.sync.repository(entry.path) as repo:
            if repo is None:
                return MSG_NO_LOGS
            try:
                return self.sync.read_history(repo) or MSG_NO_LOGS
            except (git.exc.GitError, ValueError, OSError) as e:
                logger.debug(f"No history for {entry.display_name}: {e}")
                return MSG_NO_LOGS

    def scroll_logs_down(self) -> None:
        history = self.history()
        if history is not None:
            history.scroll_down()

    def scroll_logs_up(self) -> None:
        history = self.history()
        if history is not None:
            history.scroll_up()

    # -- lifecycle -----------------------------------------------------

    def start(self) -> None:
        if self.watcher is not None:
            self.watcher.start()

    def close(self) -> None:
        if self.watcher is not None:
            self.watcher.stop()
