"""Countdown state machine for focus sessions.

The engine is driven entirely from outside: ``tick()`` is expected once per
elapsed second and the engine never looks at the wall clock to correct
drift. A session walks through four phases::

    IDLE -> OPENING -> ACTIVE -> CLOSING -> IDLE

OPENING is a fixed three second pre-roll before the nominal countdown and
CLOSING a four second grace window after it reaches zero, so the display
can show "starting" and "completed" messages. ``stop()`` may cut any
session short and return to IDLE without producing a record.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from pomo_cli.utils.logger import get_logger

from .errors import IllegalTransitionError
from .session import Session

OPENING_WINDOW = timedelta(seconds=3)
CLOSING_WINDOW = timedelta(seconds=4)
TICK = timedelta(seconds=1)


class Phase(str, Enum):
    IDLE = "idle"
    OPENING = "opening"
    ACTIVE = "active"
    CLOSING = "closing"


class SessionType(str, Enum):
    WORK = "Work"
    BREAK = "Break"


_TRANSITIONS: dict[Phase, frozenset[Phase]] = {
    Phase.IDLE: frozenset({Phase.OPENING}),
    Phase.OPENING: frozenset({Phase.ACTIVE, Phase.IDLE}),
    Phase.ACTIVE: frozenset({Phase.CLOSING, Phase.IDLE}),
    Phase.CLOSING: frozenset({Phase.IDLE}),
}


@dataclass(frozen=True)
class TimerSnapshot:
    """Everything the display needs to draw the current status."""

    phase: Phase
    session_type: SessionType | None
    remaining_time: timedelta
    timer_duration: timedelta
    percent: float

    @property
    def opening_countdown(self) -> int:
        """Whole seconds left in the pre-roll."""
        return max(0, int((self.remaining_time - self.timer_duration).total_seconds()))


@dataclass(frozen=True)
class TickResult:
    """Outcome of a single tick."""

    phase: Phase
    phase_changed: bool = False
    completed: Session | None = None


class TimerEngine:
    """
    Single-session countdown engine.

    Only one session exists at a time; starting while a session is running
    is silently ignored.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock
        self._logger = get_logger()

        self.phase = Phase.IDLE
        self.session_type: SessionType | None = None
        self.timer_duration = timedelta(0)
        self.remaining_time = timedelta(0)
        self.start_time: datetime | None = None
        self.elapsed = timedelta(0)
        self.percent = 0.0

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            phase=self.phase,
            session_type=self.session_type if self.phase is not Phase.IDLE else None,
            remaining_time=self.remaining_time,
            timer_duration=self.timer_duration,
            percent=self.percent,
        )

    @property
    def is_idle(self) -> bool:
        return self.phase is Phase.IDLE

    def start(self, session_type: SessionType, duration: timedelta) -> bool:
        """
        Begin a new session.

        Returns False (and changes nothing) when a session is already running.
        """
        if self.phase is not Phase.IDLE:
            self._logger.debug("Ignoring start of %s: timer is %s", session_type.value, self.phase.value)
            return False
        if duration <= timedelta(0):
            raise ValueError("Session duration must be positive")

        self.session_type = session_type
        self.timer_duration = duration
        self.remaining_time = duration + OPENING_WINDOW
        self.start_time = self._clock()
        self.elapsed = timedelta(0)
        self.percent = 0.0
        self._move_to(Phase.OPENING)
        self._logger.info(
            "Started %s session for %s minutes",
            session_type.value,
            int(duration.total_seconds() // 60),
        )
        return True

    def tick(self) -> TickResult:
        """Advance the countdown by one second."""
        if self.phase is Phase.IDLE:
            return TickResult(phase=self.phase)

        self.remaining_time -= TICK
        self.elapsed += TICK

        if self.phase is Phase.OPENING:
            if self.remaining_time <= self.timer_duration:
                self._move_to(Phase.ACTIVE)
                return TickResult(phase=self.phase, phase_changed=True)
            return TickResult(phase=self.phase)

        if self.phase is Phase.ACTIVE:
            self.percent = 1 - self.remaining_time / self.timer_duration
            if self.remaining_time <= timedelta(0):
                self._move_to(Phase.CLOSING)
                return TickResult(phase=self.phase, phase_changed=True)
            return TickResult(phase=self.phase)

        # CLOSING
        if self.remaining_time <= -CLOSING_WINDOW:
            return self._finish()
        return TickResult(phase=self.phase)

    def stop(self) -> bool:
        """Abandon the running session. Nothing is recorded."""
        if self.phase is Phase.IDLE:
            return False
        self._logger.info("Stopped %s session during %s", self.session_type.value, self.phase.value)
        self._move_to(Phase.IDLE)
        return True

    def _finish(self) -> TickResult:
        finished_type = self.session_type
        self._move_to(Phase.IDLE)

        if finished_type is not SessionType.WORK:
            self._logger.info("Break session finished")
            return TickResult(phase=self.phase, phase_changed=True)

        # The wall clock may have stepped back (DST, NTP) since start
        end_time = max(self._clock(), self.start_time + self.elapsed)
        completed = Session(
            start_time=self.start_time,
            end_time=end_time,
            duration=self.timer_duration,
        )
        self._logger.info("Work session completed (%s)", completed.duration)
        return TickResult(phase=self.phase, phase_changed=True, completed=completed)

    def _move_to(self, phase: Phase) -> None:
        if phase not in _TRANSITIONS[self.phase]:
            raise IllegalTransitionError(
                f"Cannot move from {self.phase.value} to {phase.value}"
            )
        self._logger.debug("Timer phase %s -> %s", self.phase.value, phase.value)
        self.phase = phase
