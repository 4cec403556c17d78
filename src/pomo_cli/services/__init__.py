"""Service layer for Pomo CLI."""

from .session_controller import SessionController

__all__ = ["SessionController"]
