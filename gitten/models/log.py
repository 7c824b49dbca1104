"""Session log and repository history models"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from gitten.constants import UNBORN_BRANCH_LABEL


@dataclass
class LogEntry:
    """One line of the session log."""
    message: str
    repository: Optional[str] = None
    branch: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        if self.repository is None:
            return self.message
        return f"{self.repository} - {self.branch or UNBORN_BRANCH_LABEL} - {self.message}"


@dataclass
class RepositoryHistory:
    """Commit log text shown in the log viewer, with its scroll offset."""
    text: str
    offset: int = 0

    @property
    def lines(self) -> list:
        return self.text.splitlines()

    def scroll_down(self) -> None:
        self.offset += 1

    def scroll_up(self) -> None:
        if self.offset > 0:
            self.offset -= 1
