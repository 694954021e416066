"""Pomodoro session state machine and timer accounting.

Lifecycle::

    Pending -> InProgress -> Paused | Completed | Cancelled
    Paused  -> InProgress | Completed | Cancelled

Completed and Cancelled are terminal. Every operation takes the session and
the current instant, mutates the session in place and returns it; disallowed
combinations raise :class:`InvalidTransitionError`.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Literal

from pomotrack.exceptions import InvalidTransitionError
from pomotrack.models.core import Pomodoro
from pomotrack.models.enums import PomodoroStatus

logger = logging.getLogger(__name__)

Operation = Literal["start", "pause", "resume", "complete", "cancel"]

OPERATIONS: tuple[Operation, ...] = ("start", "pause", "resume", "complete", "cancel")

# (current status, operation) -> next status. Pairs not listed are rejected.
TRANSITIONS: dict[tuple[PomodoroStatus, Operation], PomodoroStatus] = {
    (PomodoroStatus.Pending, "start"): PomodoroStatus.InProgress,
    (PomodoroStatus.Pending, "cancel"): PomodoroStatus.Cancelled,
    (PomodoroStatus.InProgress, "pause"): PomodoroStatus.Paused,
    (PomodoroStatus.InProgress, "complete"): PomodoroStatus.Completed,
    (PomodoroStatus.InProgress, "cancel"): PomodoroStatus.Cancelled,
    (PomodoroStatus.Paused, "resume"): PomodoroStatus.InProgress,
    (PomodoroStatus.Paused, "complete"): PomodoroStatus.Completed,
    (PomodoroStatus.Paused, "cancel"): PomodoroStatus.Cancelled,
}

TERMINAL_STATUSES = frozenset({PomodoroStatus.Completed, PomodoroStatus.Cancelled})
LIVE_STATUSES = frozenset({PomodoroStatus.InProgress, PomodoroStatus.Paused})


def next_status(status: PomodoroStatus, operation: Operation) -> PomodoroStatus:
    """Look up the status reached by applying ``operation`` to ``status``."""
    try:
        return TRANSITIONS[(status, operation)]
    except KeyError:
        raise InvalidTransitionError("pomodoro", status, operation) from None


def can_transition(status: PomodoroStatus, operation: Operation) -> bool:
    return (status, operation) in TRANSITIONS


def round_minutes(seconds: float) -> int:
    """Convert seconds to whole minutes (round half to even)."""
    return round(seconds / 60)


def _open_pause_seconds(session: Pomodoro, now: datetime) -> int:
    if session.status == PomodoroStatus.Paused and session.paused_at is not None:
        return max(0, int((now - session.paused_at).total_seconds()))
    return 0


def _apply(session: Pomodoro, operation: Operation, now: datetime) -> PomodoroStatus:
    previous = session.status
    session.status = next_status(previous, operation)
    session.updated_at = now
    logger.debug(
        "pomodoro %s: %s -> %s (%s)",
        session.id,
        previous.name,
        session.status.name,
        operation,
    )
    return previous


def start(session: Pomodoro, now: datetime) -> Pomodoro:
    """Start a pending session."""
    _apply(session, "start", now)
    session.start_time = now
    return session


def pause(session: Pomodoro, now: datetime) -> Pomodoro:
    """Pause a running session, remembering when the pause began."""
    _apply(session, "pause", now)
    session.paused_at = now
    return session


def resume(session: Pomodoro, now: datetime) -> Pomodoro:
    """Resume a paused session and account for the time spent paused."""
    paused = _open_pause_seconds(session, now)
    _apply(session, "resume", now)
    session.paused_seconds += paused
    session.paused_at = None
    return session


def complete(session: Pomodoro, now: datetime) -> Pomodoro:
    """Finish a running or paused session and record the focused minutes."""
    paused = _open_pause_seconds(session, now)
    _apply(session, "complete", now)
    session.paused_seconds += paused
    session.paused_at = None
    session.end_time = now

    start_time = session.start_time or now
    focused = (now - start_time).total_seconds() - session.paused_seconds
    session.actual_duration_minutes = max(0, round_minutes(focused))
    return session


def cancel(session: Pomodoro, now: datetime) -> Pomodoro:
    """Abandon a non-terminal session. The actual duration stays unset."""
    paused = _open_pause_seconds(session, now)
    _apply(session, "cancel", now)
    session.paused_seconds += paused
    session.paused_at = None
    session.end_time = now
    return session


def record_interruption(session: Pomodoro, now: datetime) -> Pomodoro:
    """Count an interruption against a live session."""
    if session.status not in LIVE_STATUSES:
        raise InvalidTransitionError("pomodoro", session.status, "interrupt")
    session.interruptions += 1
    session.updated_at = now
    return session


def transition(session: Pomodoro, operation: Operation, now: datetime) -> Pomodoro:
    """Dispatch ``operation`` by name."""
    handlers = {
        "start": start,
        "pause": pause,
        "resume": resume,
        "complete": complete,
        "cancel": cancel,
    }
    try:
        handler = handlers[operation]
    except KeyError:
        raise InvalidTransitionError("pomodoro", session.status, operation) from None
    return handler(session, now)


# ---------------------------------------------------------------------------
# Elapsed-time accounting
# ---------------------------------------------------------------------------


@dataclass
class TimerSnapshot:
    """What a live display needs to know about a session at one instant."""

    session_id: str
    status: PomodoroStatus
    planned_seconds: int
    elapsed_seconds: int
    remaining_seconds: int
    expired: bool = False

    @property
    def progress(self) -> float:
        """Fraction of the planned duration already focused, 0.0 to 1.0."""
        if self.planned_seconds <= 0:
            return 1.0
        return min(1.0, self.elapsed_seconds / self.planned_seconds)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.name
        data["progress"] = self.progress
        return data


def elapsed_seconds(session: Pomodoro, now: datetime) -> int:
    """Seconds of focused time so far, excluding every pause."""
    if session.start_time is None:
        return 0
    if session.status in TERMINAL_STATUSES and session.end_time is not None:
        now = session.end_time
    paused = session.paused_seconds + _open_pause_seconds(session, now)
    elapsed = (now - session.start_time).total_seconds() - paused
    return max(0, int(elapsed))


def remaining_seconds(session: Pomodoro, now: datetime) -> int:
    """Seconds left before a session's planned duration is used up.

    Pending sessions report the full planned duration and terminal sessions
    report zero.
    """
    planned = session.planned_duration_minutes * 60
    if session.status in TERMINAL_STATUSES:
        return 0
    if session.status == PomodoroStatus.Pending or session.start_time is None:
        return planned
    return max(0, planned - elapsed_seconds(session, now))


def advance(session: Pomodoro, now: datetime) -> TimerSnapshot:
    """Compute the timer state at ``now`` without changing the session."""
    remaining = remaining_seconds(session, now)
    return TimerSnapshot(
        session_id=session.id,
        status=session.status,
        planned_seconds=session.planned_duration_minutes * 60,
        elapsed_seconds=elapsed_seconds(session, now),
        remaining_seconds=remaining,
        expired=session.status == PomodoroStatus.InProgress and remaining == 0,
    )


def tick(session: Pomodoro, now: datetime) -> TimerSnapshot:
    """Advance the timer and complete the session once it runs out."""
    snapshot = advance(session, now)
    if snapshot.expired:
        complete(session, now)
        snapshot.status = session.status
    return snapshot
