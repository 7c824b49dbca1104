"""Shared constants for gitten."""

# Symbol constants
SYMBOL_CHANGED = "*"
SYMBOL_UNCHANGED = ""
UNBORN_BRANCH_LABEL = "empty"
DETACHED_HEAD_NAME = "HEAD"


# Defaults
DEFAULT_POLL_INTERVAL = 0.25
DEFAULT_HISTORY_LIMIT = 100
DEFAULT_SSH_KEY = ("~", ".ssh", "id_rsa")
HIDDEN_PREFIX = "."


# Context help shown on the bottom line
HELP_REPOSITORIES = ":co | :tag | :rh | :pull <remote> | :fetch <remote> | l to see the logs | q"
HELP_NON_REPOSITORY = "No operation for non repository item | q"
HELP_REFS = ":push <remote> | q"


# Messages appended to the session log
MSG_REPOSITORY_REQUIRED = "Repository should be selected"
MSG_NOT_A_REPOSITORY = "Selected item is not a repository"
MSG_EMPTY_COMMAND = "Empty command!"
MSG_UNKNOWN_COMMAND = "Unknown command!"
MSG_NO_LOGS = "No logs"


# TUI colors (Rich color names)
TUI_COLORS = {
    "repository": "green",
    "folder": "white",
    "highlight": "bold white on blue",
    "active_title": "bold black on white",
    "inactive_title": "white",
    "prompt": "black on white",
}
