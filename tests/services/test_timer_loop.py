"""Tests for the caller-owned timer loop, driven by a manual clock."""

from __future__ import annotations

import pytest

from pomotrack.models import PomodoroStatus
from pomotrack.models.focus import state
from pomotrack.services.timer_loop import run_timer


@pytest.fixture()
def running(make_pomodoro, clock):
    session = make_pomodoro(planned_duration_minutes=2, created_at=clock.now())
    return state.start(session, clock.now())


class TestRunTimer:
    def test_runs_until_expiry(self, running, clock) -> None:
        snapshots = []
        sleeps = []

        def fake_sleep(seconds: float) -> None:
            sleeps.append(seconds)
            clock.advance(seconds=30)

        last = run_timer(running, clock, sleep=fake_sleep, on_tick=snapshots.append, interval=1.0)

        assert running.status == PomodoroStatus.Completed
        assert running.actual_duration_minutes == 2
        assert last.expired
        assert [s.remaining_seconds for s in snapshots] == [120, 90, 60, 30, 0]
        assert sleeps == [1.0, 1.0, 1.0, 1.0]

    def test_returns_immediately_for_terminal_session(self, running, clock) -> None:
        state.cancel(running, clock.now())

        def fail_sleep(seconds: float) -> None:
            raise AssertionError("should not sleep")

        snapshot = run_timer(running, clock, sleep=fail_sleep)

        assert snapshot.remaining_seconds == 0
        assert running.status == PomodoroStatus.Cancelled

    def test_should_stop_ends_the_loop(self, running, clock) -> None:
        calls = []

        def stop_after_two() -> bool:
            calls.append(1)
            return len(calls) >= 2

        run_timer(
            running,
            clock,
            sleep=lambda s: clock.advance(seconds=10),
            should_stop=stop_after_two,
        )

        assert running.status == PomodoroStatus.InProgress
        assert len(calls) == 2

    def test_interrupt_propagates(self, running, clock) -> None:
        def interrupted(seconds: float) -> None:
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            run_timer(running, clock, sleep=interrupted)

        assert running.status == PomodoroStatus.InProgress
