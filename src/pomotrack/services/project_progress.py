"""Project progress derived from the project's tasks."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel

from pomotrack.models import Project, ProjectStatus, Task, TaskStatus


class ProjectProgress(BaseModel):
    """Progress view of a single project."""

    project_id: str | None = None
    total_tasks: int = 0
    completed_tasks: int = 0
    progress: int = 0
    overdue_risk: bool = False


def progress_percentage(completed: int, total: int) -> int:
    if total == 0:
        return 0
    return round(completed / total * 100)


def calculate_progress(tasks: Iterable[Task]) -> ProjectProgress:
    tasks = list(tasks)
    completed = sum(1 for t in tasks if t.status == TaskStatus.Completed)
    return ProjectProgress(
        total_tasks=len(tasks),
        completed_tasks=completed,
        progress=progress_percentage(completed, len(tasks)),
    )


def is_overdue_risk(project: Project, now: datetime) -> bool:
    """A project is at risk when its due date has passed and it is not done."""
    return (
        project.due_date is not None
        and project.due_date < now
        and project.status != ProjectStatus.Completed
    )


def project_progress(project: Project, tasks: Iterable[Task], now: datetime) -> ProjectProgress:
    """Progress for ``project`` counting only the tasks it owns."""
    owned = [t for t in tasks if t.project_id == project.id]
    result = calculate_progress(owned)
    result.project_id = project.id
    result.overdue_risk = is_overdue_risk(project, now)
    return result


def add_task(project: Project, task_id: str, now: datetime) -> Project:
    if task_id not in project.task_ids:
        project.task_ids = [*project.task_ids, task_id]
        project.updated_at = now
    return project


def remove_task(project: Project, task_id: str, now: datetime) -> Project:
    if task_id in project.task_ids:
        project.task_ids = [t for t in project.task_ids if t != task_id]
        project.updated_at = now
    return project
