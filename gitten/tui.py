"""Interactive TUI for gitten using Textual."""

from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Header, Static

from .__version__ import __version__
from .core.session import SessionController
from .formatters import format_log_entry
from .logging_config import get_logger
from .models.input import InputEvent, KeyKind
from .models.selection import SelectionContext
from .ui.widgets import HistoryPanel, ListPanel

logger = get_logger(__name__)

NAMED_KEYS = {
    "up": KeyKind.UP,
    "down": KeyKind.DOWN,
    "left": KeyKind.LEFT,
    "right": KeyKind.RIGHT,
    "enter": KeyKind.ENTER,
    "escape": KeyKind.ESCAPE,
    "backspace": KeyKind.BACKSPACE,
}


def translate_key(event: events.Key) -> Optional[InputEvent]:
    """Decode a Textual key event into the session's abstract input event."""
    kind = NAMED_KEYS.get(event.key)
    if kind is not None:
        return InputEvent(kind)
    if event.is_printable and event.character:
        return InputEvent.key(event.character)
    return None


class GittenApp(App):
    """Dashboard over every repository under the workspace root."""

    TITLE = "gitten"
    SUB_TITLE = f"v{__version__}"

    CSS = """
    Screen {
        background: $surface;
        layers: base overlay;
    }

    #main {
        height: 1fr;
    }

    #repositories {
        height: 4fr;
    }

    #logs {
        height: 1fr;
    }

    #status-bar {
        dock: bottom;
        height: 1;
        background: $panel;
        padding: 0 1;
    }
    """

    def __init__(self, session: SessionController):
        super().__init__()
        self.session = session

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield Header(show_clock=False, icon="")
        with Horizontal(id="main"):
            with Vertical():
                yield ListPanel(SelectionContext.REPOSITORIES.title, id="repositories")
                yield ListPanel("Logs", follow_tail=True, id="logs")
            with Vertical():
                yield ListPanel(SelectionContext.TAGS.title, id="tags")
                yield ListPanel(SelectionContext.BRANCHES.title, id="branches")
        yield HistoryPanel(id="history")
        yield Static(id="status-bar")

    def on_mount(self) -> None:
        """Start watching the workspace and draw the first frame."""
        self.session.start()
        self.set_interval(self.session.config.poll_interval, self.poll_filesystem)
        self._render_session()

    def poll_filesystem(self) -> None:
        """Timer tick: apply at most one pending filesystem event."""
        if self.session.poll_filesystem():
            self._render_session()

    def on_key(self, event: events.Key) -> None:
        input_event = translate_key(event)
        if input_event is None:
            return
        event.stop()
        event.prevent_default()

        self.session.handle_input(input_event)
        if self.session.quit_requested:
            self.exit()
            return
        self._render_session()

    def _render_session(self) -> None:
        """Push a snapshot of the session state into the widgets."""
        session = self.session
        selection = session.selection

        self.query_one("#repositories", ListPanel).update_list(
            session.repositories.items,
            session.repositories.cursor,
            selection is SelectionContext.REPOSITORIES,
        )
        self.query_one("#branches", ListPanel).update_list(
            session.branches.items,
            session.branches.cursor,
            selection is SelectionContext.BRANCHES,
        )
        self.query_one("#tags", ListPanel).update_list(
            session.tags.items,
            session.tags.cursor,
            selection is SelectionContext.TAGS,
        )
        self.query_one("#logs", ListPanel).update_list(
            [format_log_entry(entry) for entry in session.logs], None
        )
        self.query_one("#history", HistoryPanel).update_history(session.history())

        status = session.prompt_text()
        if status is None:
            status = session.help_text()
        self.query_one("#status-bar", Static).update(status)

    def on_unmount(self) -> None:
        self.session.close()
