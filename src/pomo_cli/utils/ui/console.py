"""Shared Rich consoles.

Results go to stdout; errors go to stderr so `pomo history > file` stays
clean.
"""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=4)
def get_console(highlight: bool = True, stderr: bool = False) -> Console:
    """Get a cached Rich Console for stdout, or stderr when asked."""
    return Console(highlight=highlight, stderr=stderr)
