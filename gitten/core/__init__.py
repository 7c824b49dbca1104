"""Core session logic for gitten."""

from .commands import CommandContext, CommandInterpreter
from .session import SessionController

__all__ = ["CommandContext", "CommandInterpreter", "SessionController"]
