"""Session orchestration for the interactive focus prompt.

The controller is the single owner of the timer state. Every input from the
environment (a submitted line, a key press, a one-second tick) goes through
one of its methods, and each call runs to completion before the next one,
so no locking is needed.
"""

from collections.abc import Callable
from datetime import date, timedelta

from pomo_cli.models.focus.command_parser import (
    DEFAULT_BREAK_MINUTES,
    DEFAULT_WORK_MINUTES,
    Command,
    Invalid,
    ListForDate,
    ListToday,
    Quit,
    StartBreak,
    StartWork,
    Stop,
    parse_command,
)
from pomo_cli.models.focus.engine import SessionType, TimerEngine, TimerSnapshot
from pomo_cli.models.focus.errors import PersistenceError
from pomo_cli.models.focus.history import DayReport, SessionStore
from pomo_cli.utils.logger import get_logger


class SessionController:
    """Feeds commands and ticks into the engine and records finished work."""

    def __init__(
        self,
        store: SessionStore,
        engine: TimerEngine | None = None,
        work_minutes: int = DEFAULT_WORK_MINUTES,
        break_minutes: int = DEFAULT_BREAK_MINUTES,
        today: Callable[[], date] = date.today,
    ):
        self.store = store
        self.engine = engine or TimerEngine()
        self.work_minutes = work_minutes
        self.break_minutes = break_minutes
        self._today = today
        self._logger = get_logger()

        self.error = ""
        self.report: DayReport | None = None
        self.quit_requested = False

    # ----- Queries -----
    def snapshot(self) -> TimerSnapshot:
        return self.engine.snapshot()

    @property
    def in_session(self) -> bool:
        return not self.engine.is_idle

    @property
    def accepts_input(self) -> bool:
        """A command line is only taken at an idle prompt with no report open."""
        return self.engine.is_idle and self.report is None

    # ----- Events -----
    def submit(self, line: str) -> bool:
        """
        Handle a submitted command line.

        Returns True if a session was started, meaning the tick source
        should begin firing.
        """
        if not self.accepts_input:
            return False

        self.error = ""
        command = parse_command(line, self.work_minutes, self.break_minutes)
        if isinstance(command, Invalid):
            self._logger.debug("Rejected command %r: %s", line, command.reason)
        return self.dispatch(command)

    def dispatch(self, command: Command) -> bool:
        """
        Apply a parsed line or a key action (``Stop``, ``Quit``).

        Returns True when a session started or a stop took effect, i.e. when
        the tick source has to be switched on or off.
        """
        if isinstance(command, StartWork):
            return self._start(SessionType.WORK, command.minutes)
        if isinstance(command, StartBreak):
            return self._start(SessionType.BREAK, command.minutes)
        if isinstance(command, Stop):
            return self.stop()

        if isinstance(command, ListToday):
            self._show_report(self._today())
        elif isinstance(command, ListForDate):
            self._show_report(command.day)
        elif isinstance(command, Quit):
            self.quit()
        elif isinstance(command, Invalid):
            self.error = command.reason
        return False

    def tick(self) -> bool:
        """
        Advance the running session by one second.

        Returns True while the tick source should keep firing.
        """
        result = self.engine.tick()
        if result.completed is not None:
            try:
                self.store.append(result.completed)
            except PersistenceError as e:
                # The session is over either way
                self.error = str(e)
        return not self.engine.is_idle

    def stop(self) -> bool:
        """Abandon the running session, or close the report if one is shown."""
        if self.engine.stop():
            return True
        if self.report is not None:
            self.report = None
            return True
        return False

    def quit(self) -> None:
        self.quit_requested = True

    # ----- Internals -----
    def _start(self, session_type: SessionType, minutes: int) -> bool:
        return self.engine.start(session_type, timedelta(minutes=minutes))

    def _show_report(self, day: date) -> None:
        try:
            self.report = self.store.report_for(day)
        except PersistenceError as e:
            self.error = str(e)
