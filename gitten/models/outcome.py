"""Results of synchronization operations and commands"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MergeOutcome(Enum):
    """Classification of a pull after merge analysis."""
    UP_TO_DATE = "up-to-date"
    FAST_FORWARD = "fast-forward"
    MERGED = "merged"
    CONFLICTS = "has conflicts"


@dataclass
class SyncResult:
    """What a SyncEngine operation did."""
    message: str
    merge: Optional[MergeOutcome] = None
    commit: Optional[str] = None  # hexsha the operation left HEAD or the ref at

    def __str__(self) -> str:
        return self.message


@dataclass
class CommandResult:
    """Outcome of one interpreted command line."""
    message: str
    ok: bool = True
    refresh_refs: bool = False  # branch/tag lists must be rebuilt
