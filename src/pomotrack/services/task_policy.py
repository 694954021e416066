"""Task completion policy.

Keeps ``status``, ``is_completed`` and ``completed_at`` consistent, and owns
the tag list. Functions mutate the task passed in and return it; persisting
the result is the caller's job.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from pomotrack.exceptions import InvalidInputError
from pomotrack.models import Pomodoro, PomodoroStatus, Task, TaskStatus
from pomotrack.models.core import new_id

logger = logging.getLogger(__name__)


def mark_completed(task: Task, now: datetime) -> Task:
    task.status = TaskStatus.Completed
    task.is_completed = True
    task.completed_at = now
    task.updated_at = now
    return task


def mark_incomplete(task: Task, now: datetime | None = None) -> Task:
    task.status = TaskStatus.Pending
    task.is_completed = False
    task.completed_at = None
    if now is not None:
        task.updated_at = now
    return task


def toggle(task: Task, now: datetime) -> Task:
    """Flip a task between completed and pending."""
    if task.is_completed:
        return mark_incomplete(task, now)
    return mark_completed(task, now)


def set_status(task: Task, status: TaskStatus, now: datetime) -> Task:
    """Move a task to ``status``, updating completion fields when it matters.

    Leaving Completed goes through :func:`mark_incomplete`, which resets the
    status to Pending.
    """
    if status == TaskStatus.Completed:
        if not task.is_completed:
            return mark_completed(task, now)
        task.status = status
        return task
    if task.is_completed:
        return mark_incomplete(task, now)

    task.status = status
    task.updated_at = now
    return task


def bulk_set_status(tasks: Iterable[Task], status: TaskStatus, now: datetime) -> list[Task]:
    """Apply :func:`set_status` to every task."""
    updated = [set_status(task, status, now) for task in tasks]
    logger.debug("bulk status %s applied to %d tasks", status.name, len(updated))
    return updated


def add_tag(task: Task, tag: str, now: datetime) -> Task:
    """Add a tag unless it is blank or already present (ignoring case)."""
    if not tag or not tag.strip():
        return task
    tag = tag.strip()
    if any(existing.lower() == tag.lower() for existing in task.tags):
        return task
    task.tags = [*task.tags, tag]
    task.updated_at = now
    return task


def remove_tag(task: Task, tag: str, now: datetime) -> Task:
    """Remove every tag equal to ``tag`` ignoring case. Blank tags are ignored."""
    if not tag or not tag.strip():
        return task
    wanted = tag.strip().lower()
    task.tags = [t for t in task.tags if t.lower() != wanted]
    task.updated_at = now
    return task


def refresh_pomodoro_progress(task: Task, pomodoros: Iterable[Pomodoro], now: datetime) -> Task:
    """Recount the task's completed sessions, breaks included."""
    task.completed_pomodoros = sum(
        1 for p in pomodoros if p.task_id == task.id and p.status == PomodoroStatus.Completed
    )
    task.updated_at = now
    return task


def duplicate_task(
    task: Task,
    now: datetime,
    new_title: str | None = None,
    new_id_value: str | None = None,
) -> Task:
    """Copy a task as a fresh pending task.

    Completion state and the pomodoro count are reset; tags are copied.
    """
    return Task(
        id=new_id_value or new_id(),
        title=new_title or f"Copy of {task.title}",
        description=task.description,
        status=TaskStatus.Pending,
        priority=task.priority,
        project_id=task.project_id,
        assignee_id=task.assignee_id,
        assignee_name=task.assignee_name,
        due_date=task.due_date,
        estimated_pomodoros=task.estimated_pomodoros,
        completed_pomodoros=0,
        tags=list(task.tags),
        is_completed=False,
        completed_at=None,
        created_at=now,
    )


def ensure_consistent(task: Task) -> Task:
    """Check the completion invariants of a task loaded from elsewhere.

    Raises:
        InvalidInputError: If the flags and status disagree.
    """
    if task.is_completed != (task.status == TaskStatus.Completed):
        raise InvalidInputError(
            f"Task {task.id}: is_completed={task.is_completed} "
            f"but status={task.status.name}"
        )
    if (task.completed_at is not None) != task.is_completed:
        raise InvalidInputError(
            f"Task {task.id}: completed_at must be set iff the task is completed"
        )
    return task
