"""Widgets for the gitten TUI."""

from .widgets import HistoryPanel, ListPanel, window_start

__all__ = ["HistoryPanel", "ListPanel", "window_start"]
