"""Running external commands against a repository path"""

import shlex
import subprocess
from typing import List

from gitten.exceptions import InvalidCommandError
from gitten.logging_config import get_logger

logger = get_logger(__name__)


def build_command(command_line: str, path: str) -> List[str]:
    """
    Split a typed command line and append the repository path as last argument.

    Raises:
        InvalidCommandError: Nothing to run, or unbalanced quoting
    """
    try:
        argv = shlex.split(command_line)
    except ValueError as e:
        raise InvalidCommandError(f"Could not parse command: {e}")
    if not argv:
        raise InvalidCommandError("Empty command!")
    return argv + [path]


def run_with_path(command_line: str, path: str) -> str:
    """
    Run ``command_line <path>`` and describe how it went.

    Output is captured and discarded; the terminal belongs to the dashboard.

    Returns:
        One human-readable line for the session log
    """
    argv = build_command(command_line, path)
    logger.debug(f"Running {argv}")
    try:
        completed = subprocess.run(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
            check=False,
        )
    except OSError as e:
        return f"Error: {e.strerror or e}"

    if completed.returncode != 0:
        detail = (completed.stderr or "").strip().splitlines()
        suffix = f": {detail[-1]}" if detail else ""
        return f"'{argv[0]}' exited with status {completed.returncode}{suffix}"
    return f"'{argv[0]}' finished"
