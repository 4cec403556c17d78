"""Pomo CLI - a terminal focus timer with a work-session log."""

__version__ = "0.1.0"
