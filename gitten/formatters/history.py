"""Commit history formatting for the log viewer."""

from datetime import datetime, timedelta, timezone


def format_time(timestamp: int, offset_seconds: int, prefix: str = "Date:   ") -> str:
    """
    Format a commit time in the author's local time with its UTC offset.

    Args:
        timestamp: Seconds since the epoch
        offset_seconds: Seconds *west* of UTC, as stored by git objects
        prefix: Label placed before the date

    Returns:
        e.g. "Date:   2024-01-15 10:30:00 +0100"
    """
    east = -offset_seconds
    sign = "-" if east < 0 else "+"
    minutes = abs(east) // 60
    tz = timezone(timedelta(seconds=east))
    when = datetime.fromtimestamp(timestamp, tz=tz)
    return f"{prefix}{when:%Y-%m-%d %H:%M:%S} {sign}{minutes // 60:02d}{minutes % 60:02d}"


def format_commit(commit) -> str:
    """
    Format a commit the way ``git log`` prints it.

    Args:
        commit: git.Commit

    Returns:
        Multi-line block ending with a blank line
    """
    lines = [f"commit {commit.hexsha}"]
    if len(commit.parents) > 1:
        lines.append("Merge: " + " ".join(parent.hexsha[:8] for parent in commit.parents))
    author = commit.author
    lines.append(f"Author: {author.name} <{author.email}>")
    lines.append(format_time(commit.authored_date, commit.author_tz_offset))
    lines.append("")
    message = commit.message
    if isinstance(message, bytes):
        message = message.decode("utf-8", errors="replace")
    for line in message.splitlines():
        lines.append(f"    {line}")
    lines.append("")
    return "\n".join(lines) + "\n"


def format_history(commits) -> str:
    """Join formatted commits into the log viewer text."""
    return "".join(format_commit(commit) for commit in commits)
