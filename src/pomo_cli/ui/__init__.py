"""Terminal user interface for Pomo CLI."""
