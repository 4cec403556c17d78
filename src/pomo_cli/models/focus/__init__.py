"""Focus mode - single-session timer with a work-session log."""

from .command_parser import Command, parse_command
from .engine import Phase, SessionType, TimerEngine, TimerSnapshot
from .errors import IllegalTransitionError, PersistenceError, PomoError, UserInputError
from .history import DayReport, SessionStore, group_by_day
from .session import Session

__all__ = [
    "Command",
    "DayReport",
    "IllegalTransitionError",
    "PersistenceError",
    "Phase",
    "PomoError",
    "Session",
    "SessionStore",
    "SessionType",
    "TimerEngine",
    "TimerSnapshot",
    "UserInputError",
    "group_by_day",
    "parse_command",
]
