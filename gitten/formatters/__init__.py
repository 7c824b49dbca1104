"""Formatting utilities for gitten.

- items: repository, branch, tag and log rows
- history: commit log text for the log viewer
- help: help and prompt lines
"""

from .items import format_branch_label, format_entry_row, format_log_entry, format_ref_row
from .history import format_commit, format_history, format_time
from .help import format_help, format_prompt

__all__ = [
    # Items
    "format_branch_label",
    "format_entry_row",
    "format_log_entry",
    "format_ref_row",
    # History
    "format_commit",
    "format_history",
    "format_time",
    # Help
    "format_help",
    "format_prompt",
]
