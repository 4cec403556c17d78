"""Custom exceptions for focus mode."""


class PomoError(Exception):
    """Base exception for all Pomo CLI errors."""


class UserInputError(PomoError):
    """Raised when a command, minute value or date cannot be understood."""


class PersistenceError(PomoError):
    """Raised when the session log cannot be read or written."""


class IllegalTransitionError(PomoError):
    """Raised when the timer is asked to move between unconnected phases."""
