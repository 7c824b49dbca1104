"""Command-line argument parsing for gitten."""

import argparse

from gitten.__version__ import __version__
from gitten.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_POLL_INTERVAL


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="gitten",
        description="Terminal dashboard for every git repository under a folder",
        epilog="Keys: r/b/t switch lists, : runs a git command, / searches, "
        "l shows the commit log, $ runs a program on the selected folder, q quits",
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Workspace folder whose child folders are listed (default: current directory)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--version", action="version", version=f"gitten {__version__}")
    parser.add_argument(
        "--debug", action="store_true", help="Write debug information to the log file"
    )
    parser.add_argument(
        "--ssh-key",
        metavar="PATH",
        help="Private key used for SSH remotes (default: ~/.ssh/id_rsa)",
    )
    parser.add_argument(
        "--tag-pattern",
        metavar="GLOB",
        help="Only list tags matching this glob, e.g. 'v*'",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=DEFAULT_POLL_INTERVAL,
        metavar="SECONDS",
        help=f"How often filesystem events are applied (default: {DEFAULT_POLL_INTERVAL})",
    )
    parser.add_argument(
        "--history-limit",
        type=int,
        default=DEFAULT_HISTORY_LIMIT,
        metavar="N",
        help=f"Commits shown in the log view (default: {DEFAULT_HISTORY_LIMIT})",
    )
    parser.add_argument(
        "--no-watch",
        action="store_true",
        help="Do not watch the workspace for changes",
    )

    return parser.parse_args(argv)
