"""Custom widgets for the gitten TUI."""

from typing import Optional, Sequence

from rich.panel import Panel
from rich.text import Text
from textual.app import RenderResult
from textual.widget import Widget

from gitten.constants import TUI_COLORS
from gitten.models.log import RepositoryHistory
from gitten.models.workspace import ListItemRenderable


def window_start(count: int, cursor: Optional[int], height: int, follow_tail: bool = False) -> int:
    """First visible row so that the cursor (or the last row) stays on screen."""
    if height <= 0 or count <= height:
        return 0
    anchor = count - 1 if follow_tail and cursor is None else cursor
    if anchor is None or anchor < height:
        return 0
    return anchor - height + 1


class ListPanel(Widget):
    """Bordered list that highlights the row under the cursor."""

    DEFAULT_CSS = """
    ListPanel {
        height: 1fr;
    }
    """

    def __init__(self, title: str, follow_tail: bool = False, **kwargs):
        super().__init__(**kwargs)
        self.title_text = title
        self.follow_tail = follow_tail
        self.items: Sequence = []
        self.cursor: Optional[int] = None
        self.active = False

    def update_list(self, items: Sequence, cursor: Optional[int], active: bool = False) -> None:
        self.items = items
        self.cursor = cursor
        self.active = active
        self.refresh()

    def render(self) -> RenderResult:
        """Render the visible slice of the list inside a titled border."""
        width = max(self.size.width - 4, 1)
        height = max(self.size.height - 2, 1)
        start = window_start(len(self.items), self.cursor, height, self.follow_tail)

        body = Text(no_wrap=True, overflow="ellipsis")
        for index in range(start, min(len(self.items), start + height)):
            item = self.items[index]
            if isinstance(item, ListItemRenderable):
                row = item.to_list_item(width)
            else:
                row = Text(str(item))
            if index == self.cursor:
                row.stylize(TUI_COLORS["highlight"])
            if index > start:
                body.append("\n")
            body.append_text(row)

        style = TUI_COLORS["active_title"] if self.active else TUI_COLORS["inactive_title"]
        return Panel(
            body,
            title=Text(self.title_text, style=style),
            title_align="left",
            height=self.size.height or None,
        )


class HistoryPanel(Widget):
    """Read-only commit log overlay for the selected repository."""

    DEFAULT_CSS = """
    HistoryPanel {
        layer: overlay;
        width: 1fr;
        height: 1fr;
        margin: 1 4;
        background: $surface;
        display: none;
    }
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.history: Optional[RepositoryHistory] = None

    def update_history(self, history: Optional[RepositoryHistory]) -> None:
        self.history = history
        self.display = history is not None
        self.refresh()

    def render(self) -> RenderResult:
        lines = self.history.lines if self.history else []
        offset = self.history.offset if self.history else 0
        height = max(self.size.height - 2, 1)
        visible = "\n".join(lines[offset:offset + height])
        return Panel(Text(visible), title="Logs", title_align="left", height=self.size.height or None)
