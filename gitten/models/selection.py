"""Selection state: cursor lists, selection context and input modes."""
from enum import Enum
from typing import Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")


class SelectionContext(Enum):
    """Which list receives navigation keys and which verbs are legal."""
    REPOSITORIES = "Repositories"
    BRANCHES = "Branches"
    TAGS = "Tags"

    @property
    def title(self) -> str:
        """Panel title with the hotkey highlighted, e.g. "(R)epositories"."""
        return f"({self.value[0]}){self.value[1:]}"


class InputMode(Enum):
    """How raw key events are interpreted."""
    NORMAL = "normal"
    COMMAND_LINE = "command-line"
    SEARCH = "search"
    LOG_VIEW = "log-view"
    RUN_COMMAND = "run-command"


class SelectionList(Generic[T]):
    """A cursor over an ordered sequence with wraparound navigation.

    ``cursor`` is either None (nothing selected) or a valid index into
    ``items``. Navigating an empty list parks the cursor at 0 without ever
    indexing into ``items``.
    """

    def __init__(self, items: Optional[Sequence[T]] = None):
        self.items: List[T] = list(items) if items else []
        self.cursor: Optional[int] = None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    @property
    def selected(self) -> Optional[T]:
        """The item under the cursor, or None."""
        if self.cursor is None or not 0 <= self.cursor < len(self.items):
            return None
        return self.items[self.cursor]

    def next(self) -> None:
        """Move forward by one, wrapping to the first item."""
        if self.cursor is None or not self.items:
            self.cursor = 0
        elif self.cursor >= len(self.items) - 1:
            self.cursor = 0
        else:
            self.cursor += 1

    def previous(self) -> None:
        """Move back by one, wrapping to the last item."""
        if self.cursor is None or not self.items:
            self.cursor = 0
        elif self.cursor == 0:
            self.cursor = len(self.items) - 1
        else:
            self.cursor -= 1

    def unselect(self) -> None:
        self.cursor = None

    def search(self, text: str) -> None:
        """Select the last item whose display text contains ``text``.

        Matching is case-insensitive and scans the whole list, so with
        duplicates the final match wins. No match leaves the cursor alone.
        """
        needle = text.lower()
        for index, item in enumerate(self.items):
            if needle in str(item).lower():
                self.cursor = index

    def replace(self, items: Sequence[T]) -> None:
        """Swap in new items and clear the cursor."""
        self.unselect()
        self.items = list(items)
