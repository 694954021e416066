"""Task and project statistics.

All functions are pure: they take an in-memory snapshot and the current
instant and return a view model.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from pydantic import BaseModel

from pomotrack.models import Project, ProjectStatus, Task, TaskStatus

# Productivity score weights
COMPLETION_WEIGHT = 60
OVERDUE_PENALTY = 20
ACTIVITY_WEIGHT = 20
WEEKLY_COMPLETION_TARGET = 5


class TaskStats(BaseModel):
    """Aggregate figures for a set of tasks."""

    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    cancelled: int = 0
    overdue: int = 0
    completed_this_week: int = 0
    average_completion_time_days: float = 0.0
    productivity_score: int = 100


class ProjectStats(BaseModel):
    """Project counts per status."""

    total: int = 0
    active: int = 0
    completed: int = 0
    on_hold: int = 0


def is_overdue(task: Task, now: datetime) -> bool:
    return task.due_date is not None and task.due_date < now and not task.is_completed


def week_start(now: datetime) -> datetime:
    """The same time of day on the most recent Sunday."""
    return now - timedelta(days=(now.weekday() + 1) % 7)


def productivity_score(
    total: int, completed: int, overdue: int, completed_this_week: int
) -> int:
    """Score overall productivity from 0 to 100.

    Completion rate carries 60 points, overdue tasks cost up to 20 and
    recent activity adds up to 20, saturating at five completions a week.
    An empty task list scores 100.
    """
    if total == 0:
        return 100

    completion_rate = completed / total
    overdue_rate = overdue / total
    weekly_activity = min(completed_this_week / WEEKLY_COMPLETION_TARGET, 1.0)

    score = (
        completion_rate * COMPLETION_WEIGHT
        - overdue_rate * OVERDUE_PENALTY
        + weekly_activity * ACTIVITY_WEIGHT
    )
    return max(0, min(100, round(score)))


def average_completion_days(tasks: Iterable[Task]) -> float:
    durations = [
        (t.completed_at - t.created_at).total_seconds() / 86400
        for t in tasks
        if t.is_completed and t.completed_at is not None
    ]
    if not durations:
        return 0.0
    return round(sum(durations) / len(durations), 1)


def compute_task_stats(
    tasks: Iterable[Task], now: datetime, project_id: str | None = None
) -> TaskStats:
    """Compute task statistics, optionally restricted to one project."""
    tasks = [t for t in tasks if project_id is None or t.project_id == project_id]
    start_of_week = week_start(now)

    total = len(tasks)
    completed = sum(1 for t in tasks if t.status == TaskStatus.Completed)
    overdue = sum(1 for t in tasks if is_overdue(t, now))
    completed_this_week = sum(
        1
        for t in tasks
        if t.is_completed and t.completed_at is not None and t.completed_at >= start_of_week
    )

    return TaskStats(
        total=total,
        pending=sum(1 for t in tasks if t.status == TaskStatus.Pending),
        in_progress=sum(1 for t in tasks if t.status == TaskStatus.InProgress),
        completed=completed,
        cancelled=sum(1 for t in tasks if t.status == TaskStatus.Cancelled),
        overdue=overdue,
        completed_this_week=completed_this_week,
        average_completion_time_days=average_completion_days(tasks),
        productivity_score=productivity_score(total, completed, overdue, completed_this_week),
    )


def compute_project_stats(projects: Iterable[Project]) -> ProjectStats:
    projects = list(projects)
    return ProjectStats(
        total=len(projects),
        active=sum(1 for p in projects if p.status == ProjectStatus.Active),
        completed=sum(1 for p in projects if p.status == ProjectStatus.Completed),
        on_hold=sum(1 for p in projects if p.status == ProjectStatus.OnHold),
    )
