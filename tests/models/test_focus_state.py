"""Unit tests for pomotrack.models.focus.state.

Coverage strategy
-----------------
* The transition table is checked exhaustively: every (status, operation)
  pair either reaches the documented status or raises.
* Timer accounting is driven by explicit instants, never the wall clock.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from pomotrack.exceptions import InvalidTransitionError
from pomotrack.models import PomodoroStatus
from pomotrack.models.focus import state
from pomotrack.models.focus.state import OPERATIONS, TRANSITIONS

T0 = datetime(2026, 1, 5, 9, 0, tzinfo=UTC)


def at(minutes: float = 0, seconds: float = 0) -> datetime:
    return T0 + timedelta(minutes=minutes, seconds=seconds)


@pytest.fixture()
def session(make_pomodoro):
    return make_pomodoro(planned_duration_minutes=25, created_at=T0)


@pytest.fixture()
def running(session):
    return state.start(session, at(0))


# ---------------------------------------------------------------------------
# Transition table
# ---------------------------------------------------------------------------


class TestTransitionTable:
    @pytest.mark.parametrize(
        "status,operation,expected",
        [
            (PomodoroStatus.Pending, "start", PomodoroStatus.InProgress),
            (PomodoroStatus.Pending, "cancel", PomodoroStatus.Cancelled),
            (PomodoroStatus.InProgress, "pause", PomodoroStatus.Paused),
            (PomodoroStatus.InProgress, "complete", PomodoroStatus.Completed),
            (PomodoroStatus.InProgress, "cancel", PomodoroStatus.Cancelled),
            (PomodoroStatus.Paused, "resume", PomodoroStatus.InProgress),
            (PomodoroStatus.Paused, "complete", PomodoroStatus.Completed),
            (PomodoroStatus.Paused, "cancel", PomodoroStatus.Cancelled),
        ],
    )
    def test_allowed(self, status, operation, expected) -> None:
        assert state.next_status(status, operation) == expected
        assert state.can_transition(status, operation)

    def test_everything_else_is_rejected(self) -> None:
        for status in PomodoroStatus:
            for operation in OPERATIONS:
                if (status, operation) in TRANSITIONS:
                    continue
                assert not state.can_transition(status, operation)
                with pytest.raises(InvalidTransitionError):
                    state.next_status(status, operation)

    @pytest.mark.parametrize("terminal", [PomodoroStatus.Completed, PomodoroStatus.Cancelled])
    def test_terminal_states_accept_nothing(self, terminal) -> None:
        assert not any(state.can_transition(terminal, op) for op in OPERATIONS)

    def test_error_names_the_current_status(self, session) -> None:
        with pytest.raises(InvalidTransitionError) as exc_info:
            state.pause(session, at(1))

        assert exc_info.value.current == PomodoroStatus.Pending
        assert exc_info.value.operation == "pause"
        assert "Pending" in str(exc_info.value)

    def test_rejected_operation_leaves_session_untouched(self, session) -> None:
        before = session.model_dump()
        with pytest.raises(InvalidTransitionError):
            state.complete(session, at(5))
        assert session.model_dump() == before

    def test_dispatch_by_name(self, session) -> None:
        state.transition(session, "start", at(0))
        assert session.status == PomodoroStatus.InProgress

    def test_dispatch_unknown_operation(self, session) -> None:
        with pytest.raises(InvalidTransitionError):
            state.transition(session, "explode", at(0))  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


class TestOperations:
    def test_start_sets_start_time(self, session) -> None:
        state.start(session, at(0))

        assert session.status == PomodoroStatus.InProgress
        assert session.start_time == at(0)
        assert session.updated_at == at(0)

    def test_pause_then_resume_accumulates_pause(self, running) -> None:
        state.pause(running, at(10))
        assert running.paused_at == at(10)

        state.resume(running, at(13))
        assert running.status == PomodoroStatus.InProgress
        assert running.paused_at is None
        assert running.paused_seconds == 180

    def test_complete_excludes_paused_time(self, running) -> None:
        state.pause(running, at(10))
        state.resume(running, at(15))
        state.complete(running, at(30))

        assert running.status == PomodoroStatus.Completed
        assert running.end_time == at(30)
        assert running.actual_duration_minutes == 25

    def test_complete_while_paused_closes_the_pause(self, running) -> None:
        state.pause(running, at(20))
        state.complete(running, at(26))

        assert running.paused_seconds == 360
        assert running.paused_at is None
        assert running.actual_duration_minutes == 20

    def test_complete_rounds_half_to_even(self, running) -> None:
        # 150 seconds is 2.5 minutes
        state.complete(running, at(seconds=150))
        assert running.actual_duration_minutes == 2

    def test_actual_never_exceeds_wall_time(self, running) -> None:
        state.pause(running, at(3))
        state.resume(running, at(8))
        state.pause(running, at(12))
        state.resume(running, at(14))
        state.complete(running, at(20))

        wall_minutes = (running.end_time - running.start_time).total_seconds() / 60
        assert 0 <= running.actual_duration_minutes <= wall_minutes
        assert running.actual_duration_minutes == 13

    @pytest.mark.parametrize("prepare", ["pending", "running", "paused"])
    def test_cancel_from_any_live_state(self, session, prepare) -> None:
        if prepare in ("running", "paused"):
            state.start(session, at(0))
        if prepare == "paused":
            state.pause(session, at(5))

        state.cancel(session, at(10))

        assert session.status == PomodoroStatus.Cancelled
        assert session.end_time == at(10)
        assert session.actual_duration_minutes is None

    def test_cancel_after_completion_is_rejected(self, running) -> None:
        state.complete(running, at(25))
        with pytest.raises(InvalidTransitionError):
            state.cancel(running, at(26))

    def test_interruptions_only_while_live(self, session) -> None:
        with pytest.raises(InvalidTransitionError):
            state.record_interruption(session, at(0))

        state.start(session, at(0))
        state.record_interruption(session, at(1))
        state.pause(session, at(2))
        state.record_interruption(session, at(3))
        assert session.interruptions == 2

        state.cancel(session, at(4))
        with pytest.raises(InvalidTransitionError):
            state.record_interruption(session, at(5))


# ---------------------------------------------------------------------------
# Timer accounting
# ---------------------------------------------------------------------------


class TestTimer:
    def test_pending_reports_full_duration(self, session) -> None:
        snapshot = state.advance(session, at(100))

        assert snapshot.remaining_seconds == 25 * 60
        assert snapshot.elapsed_seconds == 0
        assert not snapshot.expired

    def test_remaining_counts_down(self, running) -> None:
        snapshot = state.advance(running, at(10))

        assert snapshot.elapsed_seconds == 600
        assert snapshot.remaining_seconds == 900
        assert snapshot.progress == pytest.approx(0.4)

    def test_paused_time_does_not_count(self, running) -> None:
        state.pause(running, at(10))

        assert state.advance(running, at(40)).remaining_seconds == 900

        state.resume(running, at(40))
        assert state.advance(running, at(45)).remaining_seconds == 600

    def test_terminal_sessions_report_zero(self, running) -> None:
        state.cancel(running, at(5))
        snapshot = state.advance(running, at(6))

        assert snapshot.remaining_seconds == 0
        assert snapshot.elapsed_seconds == 300
        assert not snapshot.expired

    def test_advance_is_pure(self, running) -> None:
        before = running.model_dump()
        state.advance(running, at(60))
        assert running.model_dump() == before

    def test_tick_before_expiry_changes_nothing(self, running) -> None:
        snapshot = state.tick(running, at(24))

        assert running.status == PomodoroStatus.InProgress
        assert snapshot.remaining_seconds == 60

    def test_tick_at_expiry_completes(self, running) -> None:
        snapshot = state.tick(running, at(25))

        assert snapshot.expired
        assert snapshot.status == PomodoroStatus.Completed
        assert running.status == PomodoroStatus.Completed
        assert running.actual_duration_minutes == 25

    def test_paused_session_never_expires(self, running) -> None:
        state.pause(running, at(1))
        snapshot = state.tick(running, at(120))

        assert not snapshot.expired
        assert running.status == PomodoroStatus.Paused

    def test_snapshot_to_dict(self, running) -> None:
        data = state.advance(running, at(5)).to_dict()

        assert data["status"] == "InProgress"
        assert data["remaining_seconds"] == 1200
        assert data["progress"] == pytest.approx(0.2)


class TestRoundMinutes:
    @pytest.mark.parametrize(
        "seconds,expected",
        [(0, 0), (29, 0), (31, 1), (90, 2), (150, 2), (210, 4), (1500, 25)],
    )
    def test_round_half_to_even(self, seconds, expected) -> None:
        assert state.round_minutes(seconds) == expected
