"""Aggregates over pomodoro sessions."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel, Field

from pomotrack.models.core import Pomodoro
from pomotrack.models.enums import PomodoroStatus, PomodoroType


class FocusSummary(BaseModel):
    """Focus metrics for a set of sessions."""

    total_sessions: int = 0
    completed_work_sessions: int = 0
    cancelled_sessions: int = 0
    completed_breaks: int = 0
    total_focus_minutes: int = 0
    average_session_minutes: float = 0.0
    interruptions: int = 0
    completed_today: int = 0
    minutes_by_task: dict[str, int] = Field(default_factory=dict)


def _same_day(a: datetime, b: datetime) -> bool:
    if a.tzinfo is not None and b.tzinfo is not None:
        a = a.astimezone(b.tzinfo)
    return a.date() == b.date()


def compute_focus_summary(sessions: Iterable[Pomodoro], now: datetime) -> FocusSummary:
    """Summarize completed and cancelled sessions.

    Only completed Work sessions count towards focus minutes; breaks are
    tallied separately.
    """
    sessions = list(sessions)
    summary = FocusSummary(total_sessions=len(sessions))
    per_task: dict[str, int] = defaultdict(int)
    work_minutes: list[int] = []

    for s in sessions:
        summary.interruptions += s.interruptions
        if s.status == PomodoroStatus.Cancelled:
            summary.cancelled_sessions += 1
            continue
        if s.status != PomodoroStatus.Completed:
            continue
        if s.type != PomodoroType.Work:
            summary.completed_breaks += 1
            continue

        minutes = s.actual_duration_minutes or 0
        summary.completed_work_sessions += 1
        work_minutes.append(minutes)
        per_task[s.task_id] += minutes
        if s.end_time is not None and _same_day(s.end_time, now):
            summary.completed_today += 1

    summary.total_focus_minutes = sum(work_minutes)
    if work_minutes:
        summary.average_session_minutes = round(sum(work_minutes) / len(work_minutes), 1)
    summary.minutes_by_task = dict(per_task)
    return summary
