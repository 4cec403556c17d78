"""Unit tests for the countdown state machine in models/focus/engine.py.

A FakeClock (see conftest) stamps start/end times so completion records are
deterministic; ticks are driven by hand exactly as the interval timer would.
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from pomo_cli.models.focus.engine import (
    CLOSING_WINDOW,
    OPENING_WINDOW,
    Phase,
    SessionType,
    TimerEngine,
)
from pomo_cli.models.focus.errors import IllegalTransitionError

WORK = timedelta(minutes=25)
BREAK = timedelta(minutes=5)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _tick(engine: TimerEngine, times: int):
    results = [engine.tick() for _ in range(times)]
    return results


def _ticks_to_closing(duration: timedelta) -> int:
    return int((duration + OPENING_WINDOW).total_seconds())


@pytest.fixture()
def engine(clock) -> TimerEngine:
    return TimerEngine(clock=clock)


# ---------------------------------------------------------------------------
# start()
# ---------------------------------------------------------------------------


class TestStart:
    def test_initial_state_is_idle(self, engine):
        snap = engine.snapshot()
        assert snap.phase is Phase.IDLE
        assert snap.session_type is None
        assert snap.percent == 0.0

    def test_start_enters_opening_with_pre_roll(self, engine, clock):
        expected_start = clock.now
        assert engine.start(SessionType.WORK, WORK) is True

        assert engine.phase is Phase.OPENING
        assert engine.session_type is SessionType.WORK
        assert engine.timer_duration == WORK
        assert engine.remaining_time == WORK + timedelta(seconds=3)
        assert engine.start_time == expected_start
        assert engine.percent == 0.0

    def test_start_while_running_is_ignored(self, engine):
        engine.start(SessionType.WORK, WORK)
        assert engine.start(SessionType.BREAK, BREAK) is False

        assert engine.phase is Phase.OPENING
        assert engine.session_type is SessionType.WORK
        assert engine.timer_duration == WORK

    @pytest.mark.parametrize("extra_ticks", [1, 3, 100, 1503, 1505])
    def test_start_ignored_in_every_running_phase(self, engine, extra_ticks):
        engine.start(SessionType.WORK, WORK)
        _tick(engine, extra_ticks)
        before = engine.snapshot()

        assert engine.start(SessionType.BREAK, BREAK) is False
        assert engine.snapshot() == before

    def test_zero_duration_rejected(self, engine):
        with pytest.raises(ValueError):
            engine.start(SessionType.WORK, timedelta(0))
        assert engine.phase is Phase.IDLE


# ---------------------------------------------------------------------------
# tick()
# ---------------------------------------------------------------------------


class TestTick:
    def test_tick_while_idle_does_nothing(self, engine):
        result = engine.tick()
        assert result.phase is Phase.IDLE
        assert result.phase_changed is False
        assert result.completed is None
        assert engine.remaining_time == timedelta(0)

    def test_each_tick_removes_one_second(self, engine):
        engine.start(SessionType.WORK, WORK)
        _tick(engine, 10)
        assert engine.remaining_time == WORK + OPENING_WINDOW - timedelta(seconds=10)

    def test_opening_lasts_three_ticks(self, engine):
        engine.start(SessionType.WORK, WORK)
        results = _tick(engine, 3)

        assert [r.phase for r in results] == [Phase.OPENING, Phase.OPENING, Phase.ACTIVE]
        assert results[-1].phase_changed is True
        assert engine.remaining_time == WORK

    def test_full_work_session_timeline(self, engine):
        engine.start(SessionType.WORK, WORK)
        to_closing = _ticks_to_closing(WORK)
        assert to_closing == 25 * 60 + 3

        _tick(engine, to_closing - 1)
        assert engine.phase is Phase.ACTIVE
        assert engine.remaining_time == timedelta(seconds=1)

        result = engine.tick()
        assert result.phase is Phase.CLOSING
        assert result.phase_changed is True
        assert engine.remaining_time == timedelta(0)
        assert engine.percent == 1.0

        closing = _tick(engine, 4)
        assert [r.phase for r in closing] == [Phase.CLOSING] * 3 + [Phase.IDLE]
        assert engine.remaining_time == -CLOSING_WINDOW
        assert all(r.completed is None for r in closing[:3])

        completed = closing[-1].completed
        assert completed is not None
        assert completed.duration == WORK

    def test_remaining_goes_negative_during_closing(self, engine):
        engine.start(SessionType.BREAK, BREAK)
        _tick(engine, _ticks_to_closing(BREAK) + 2)
        assert engine.phase is Phase.CLOSING
        assert engine.remaining_time == timedelta(seconds=-2)

    def test_completion_record_uses_start_and_clock(self, clock):
        engine = TimerEngine(clock=clock)
        started_at = clock.now
        engine.start(SessionType.WORK, timedelta(minutes=1))
        results = _tick(engine, _ticks_to_closing(timedelta(minutes=1)) + 4)

        completed = results[-1].completed
        assert completed.start_time == started_at
        assert completed.end_time > completed.start_time
        assert completed.duration == timedelta(minutes=1)

    def test_clock_stepping_back_still_yields_valid_record(self):
        started_at = datetime(2024, 10, 27, 2, 50)
        # Second reading is an hour earlier, as on a DST fall-back
        readings = iter([started_at, started_at - timedelta(hours=1)])
        engine = TimerEngine(clock=readings.__next__)

        engine.start(SessionType.WORK, timedelta(minutes=1))
        results = _tick(engine, _ticks_to_closing(timedelta(minutes=1)) + 4)

        completed = results[-1].completed
        assert completed.start_time == started_at
        assert completed.end_time == started_at + timedelta(seconds=67)
        assert completed.duration == timedelta(minutes=1)

    def test_break_never_completes_with_record(self, engine):
        engine.start(SessionType.BREAK, BREAK)
        results = _tick(engine, _ticks_to_closing(BREAK) + 4)

        assert engine.phase is Phase.IDLE
        assert all(r.completed is None for r in results)
        assert results[-1].phase_changed is True

    def test_tick_after_completion_is_noop(self, engine):
        engine.start(SessionType.WORK, timedelta(minutes=1))
        _tick(engine, _ticks_to_closing(timedelta(minutes=1)) + 4)
        result = engine.tick()
        assert result.phase is Phase.IDLE
        assert result.completed is None


# ---------------------------------------------------------------------------
# percent
# ---------------------------------------------------------------------------


class TestPercent:
    def test_percent_zero_through_opening(self, engine):
        engine.start(SessionType.WORK, WORK)
        for _ in range(3):
            engine.tick()
            assert engine.percent == 0.0

    def test_percent_monotonic_while_active(self, engine):
        duration = timedelta(minutes=2)
        engine.start(SessionType.WORK, duration)
        _tick(engine, 3)

        previous = engine.percent
        while engine.phase is Phase.ACTIVE:
            engine.tick()
            assert engine.percent >= previous
            assert 0.0 <= engine.percent <= 1.0
            previous = engine.percent

        assert engine.phase is Phase.CLOSING
        assert engine.percent == 1.0

    def test_percent_halfway(self, engine):
        engine.start(SessionType.WORK, timedelta(minutes=2))
        _tick(engine, 3 + 60)
        assert engine.percent == pytest.approx(0.5)

    def test_percent_frozen_during_closing(self, engine):
        engine.start(SessionType.BREAK, timedelta(minutes=1))
        _tick(engine, _ticks_to_closing(timedelta(minutes=1)) + 2)
        assert engine.phase is Phase.CLOSING
        assert engine.percent == 1.0


# ---------------------------------------------------------------------------
# stop()
# ---------------------------------------------------------------------------


class TestStop:
    @pytest.mark.parametrize(
        "ticks, phase",
        [(0, Phase.OPENING), (1, Phase.OPENING), (5, Phase.ACTIVE), (1504, Phase.CLOSING)],
    )
    def test_stop_returns_to_idle_from_any_phase(self, engine, ticks, phase):
        engine.start(SessionType.WORK, WORK)
        _tick(engine, ticks)
        assert engine.phase is phase

        assert engine.stop() is True
        assert engine.phase is Phase.IDLE

    def test_stop_never_produces_a_record(self, engine):
        engine.start(SessionType.WORK, timedelta(minutes=1))
        _tick(engine, 30)
        engine.stop()

        results = _tick(engine, 100)
        assert all(r.completed is None for r in results)

    def test_stop_when_idle_is_noop(self, engine):
        assert engine.stop() is False
        assert engine.phase is Phase.IDLE

    def test_can_start_again_after_stop(self, engine):
        engine.start(SessionType.WORK, WORK)
        engine.stop()
        assert engine.start(SessionType.BREAK, BREAK) is True
        assert engine.session_type is SessionType.BREAK
        assert engine.remaining_time == BREAK + OPENING_WINDOW


# ---------------------------------------------------------------------------
# Snapshot & transition guard
# ---------------------------------------------------------------------------


class TestSnapshot:
    def test_snapshot_reports_display_values(self, engine):
        engine.start(SessionType.BREAK, BREAK)
        _tick(engine, 1)
        snap = engine.snapshot()

        assert snap.phase is Phase.OPENING
        assert snap.session_type is SessionType.BREAK
        assert snap.timer_duration == BREAK
        assert snap.remaining_time == BREAK + timedelta(seconds=2)
        assert snap.opening_countdown == 2

    def test_snapshot_hides_session_type_when_idle(self, engine):
        engine.start(SessionType.WORK, WORK)
        engine.stop()
        assert engine.snapshot().session_type is None


class TestTransitionGuard:
    def test_skipping_phases_raises(self, engine):
        with pytest.raises(IllegalTransitionError):
            engine._move_to(Phase.CLOSING)

    def test_closing_cannot_go_back_to_active(self, engine):
        engine.start(SessionType.WORK, timedelta(minutes=1))
        _tick(engine, _ticks_to_closing(timedelta(minutes=1)))
        with pytest.raises(IllegalTransitionError):
            engine._move_to(Phase.ACTIVE)
