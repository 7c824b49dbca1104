"""Abstract input events delivered by the terminal layer"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyKind(Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    ENTER = "enter"
    ESCAPE = "escape"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class InputEvent:
    """A decoded key press."""
    kind: KeyKind
    char: Optional[str] = None

    @classmethod
    def key(cls, char: str) -> "InputEvent":
        return cls(KeyKind.CHAR, char)
