"""Focus session models: state machine, cycling and analytics."""

from .analytics import FocusSummary, compute_focus_summary
from .cycling import CycleState, PomodoroConfig, next_session_type, planned_minutes
from .state import TimerSnapshot, advance, tick

__all__ = [
    "CycleState",
    "FocusSummary",
    "PomodoroConfig",
    "TimerSnapshot",
    "advance",
    "compute_focus_summary",
    "next_session_type",
    "planned_minutes",
    "tick",
]
