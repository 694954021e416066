"""Work/break cycling policy.

Everything here is a pure function of the completed-session history and the
configuration. Callers decide whether to create the recommended session.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from pomotrack.models.core import Pomodoro
from pomotrack.models.enums import PomodoroStatus, PomodoroType

BREAK_TYPES = frozenset({PomodoroType.ShortBreak, PomodoroType.LongBreak})


@dataclass
class PomodoroConfig:
    """Configuration for Pomodoro cycling."""

    work_minutes: int = 25
    short_break_minutes: int = 5
    long_break_minutes: int = 15
    sessions_before_long_break: int = 4


def completed_history(sessions: Iterable[Pomodoro]) -> list[PomodoroType]:
    """Types of the completed sessions, oldest first.

    Sessions are ordered by end time; ones without an end time keep their
    relative order at the front.
    """
    done = [s for s in sessions if s.status == PomodoroStatus.Completed]
    done.sort(key=lambda s: (s.end_time is not None, s.end_time or s.created_at))
    return [s.type for s in done]


def work_sessions_since_long_break(history: Sequence[PomodoroType]) -> int:
    count = 0
    for session_type in reversed(history):
        if session_type == PomodoroType.LongBreak:
            break
        if session_type == PomodoroType.Work:
            count += 1
    return count


def next_session_type(
    history: Sequence[PomodoroType], config: PomodoroConfig | None = None
) -> PomodoroType:
    """Recommend the type of the session that should follow ``history``.

    After a break (or with no history) the answer is always Work. After Work
    it is LongBreak once ``sessions_before_long_break`` Work sessions have
    been completed since the last long break, otherwise ShortBreak.
    """
    config = config or PomodoroConfig()
    if not history or history[-1] in BREAK_TYPES:
        return PomodoroType.Work

    cap = config.sessions_before_long_break
    if cap > 0 and work_sessions_since_long_break(history) >= cap:
        return PomodoroType.LongBreak
    return PomodoroType.ShortBreak


def planned_minutes(session_type: PomodoroType, config: PomodoroConfig | None = None) -> int:
    """Get the configured duration in minutes for a session type."""
    config = config or PomodoroConfig()
    if session_type == PomodoroType.Work:
        return config.work_minutes
    if session_type == PomodoroType.ShortBreak:
        return config.short_break_minutes
    return config.long_break_minutes


@dataclass
class CycleState:
    """Position within the current Pomodoro cycle, for display."""

    cycle_number: int = 1
    session_in_cycle: int = 1
    total_sessions_completed: int = 0
    current_phase: PomodoroType = PomodoroType.Work

    @classmethod
    def from_history(
        cls, history: Sequence[PomodoroType], config: PomodoroConfig | None = None
    ) -> "CycleState":
        """Rebuild the cycle position from completed session types."""
        config = config or PomodoroConfig()
        long_breaks = sum(1 for t in history if t == PomodoroType.LongBreak)
        since_long = work_sessions_since_long_break(history)
        phase = next_session_type(history, config)

        # The session in progress counts once it is a Work session
        session_in_cycle = since_long + 1 if phase == PomodoroType.Work else since_long
        return cls(
            cycle_number=long_breaks + 1,
            session_in_cycle=max(1, session_in_cycle),
            total_sessions_completed=sum(1 for t in history if t == PomodoroType.Work),
            current_phase=phase,
        )

    def get_duration(self, config: PomodoroConfig | None = None) -> int:
        """Get duration in minutes for current phase."""
        return planned_minutes(self.current_phase, config)

    def progress_dots(self, config: PomodoroConfig | None = None) -> str:
        """Get progress dots showing cycle position."""
        config = config or PomodoroConfig()
        dots = []
        for i in range(1, config.sessions_before_long_break + 1):
            if i < self.session_in_cycle:
                dots.append("●")  # Completed
            elif i == self.session_in_cycle and self.current_phase == PomodoroType.Work:
                dots.append("◉")  # Current
            elif i == self.session_in_cycle:
                dots.append("●")  # Just finished, on a break
            else:
                dots.append("○")  # Upcoming

        return " ".join(dots)

    def to_dict(self) -> dict:
        """Convert to dictionary for display or JSON output."""
        return {
            "cycle_number": self.cycle_number,
            "session_in_cycle": self.session_in_cycle,
            "total_sessions_completed": self.total_sessions_completed,
            "current_phase": self.current_phase.name,
        }
