"""Configuration handling for gitten"""

import os
from dataclasses import dataclass
from typing import Optional

from gitten.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_POLL_INTERVAL


@dataclass
class Config:
    """Configuration for gitten with validation."""

    # Workspace root holding the repositories
    root_path: str = "."

    # Watcher drain tick in seconds
    poll_interval: float = DEFAULT_POLL_INTERVAL
    watch: bool = True

    # Remote access
    ssh_key_path: Optional[str] = None  # None = ~/.ssh/id_rsa

    # Listing options
    tag_pattern: Optional[str] = None  # glob such as "v*.*.*"
    history_limit: int = DEFAULT_HISTORY_LIMIT

    # Execution modes
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_root_path()
        self._validate_poll_interval()
        self._validate_history_limit()
        self._validate_tag_pattern()

    def _validate_root_path(self):
        """Validate root_path exists and store it resolved."""
        if not self.root_path or not str(self.root_path).strip():
            raise ValueError("root_path cannot be empty")
        path = os.path.abspath(os.path.expanduser(str(self.root_path)))
        if not os.path.exists(path):
            raise ValueError(f"Path does not exist: {path}")
        if not os.path.isdir(path):
            raise ValueError(f"Path is not a directory: {path}")
        self.root_path = os.path.realpath(path)

    def _validate_poll_interval(self):
        """Validate poll_interval is positive."""
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {self.poll_interval}")

    def _validate_history_limit(self):
        """Validate history_limit is positive."""
        if self.history_limit <= 0:
            raise ValueError(f"history_limit must be positive, got {self.history_limit}")

    def _validate_tag_pattern(self):
        """Normalize an empty tag pattern to None."""
        if self.tag_pattern is not None and not self.tag_pattern.strip():
            self.tag_pattern = None

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "root_path": self.root_path,
            "poll_interval": self.poll_interval,
            "watch": self.watch,
            "ssh_key_path": self.ssh_key_path,
            "tag_pattern": self.tag_pattern,
            "history_limit": self.history_limit,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "root_path",
            "poll_interval",
            "watch",
            "ssh_key_path",
            "tag_pattern",
            "history_limit",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
