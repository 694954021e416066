"""Project, task and pomodoro data models."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from .enums import (
    PomodoroStatus,
    PomodoroType,
    ProjectStatus,
    TaskPriority,
    TaskStatus,
)


def new_id() -> str:
    """Generate a fresh entity identifier."""
    return str(uuid.uuid4())


class Project(BaseModel):
    """Project model representing a complete project entity.

    Progress is never stored here; it is recomputed from the project's
    tasks by :mod:`pomotrack.services.project_progress`.

    Attributes:
        id: Unique identifier for the project
        name: Project name
        description: Optional longer description
        status: Active, Completed or OnHold
        due_date: Optional due date
        task_ids: IDs of owned tasks, in insertion order
        created_at: Creation timestamp
        updated_at: Last modification timestamp (None until first change)
    """

    id: str = Field(default_factory=new_id)
    name: str
    description: str | None = None
    status: ProjectStatus = ProjectStatus.Active
    due_date: datetime | None = None
    task_ids: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime | None = None


class Task(BaseModel):
    """Task model representing a complete task entity.

    Attributes:
        id: Unique identifier for the task
        title: Short task title
        description: Optional detailed description
        status: Lifecycle status (legacy aliases accepted)
        priority: Low, Medium, High or Critical
        project_id: Owning project (required)
        assignee_id: Optional assignee reference
        assignee_name: Optional assignee display name
        due_date: Optional due date with timezone
        estimated_pomodoros: Optional planned number of work sessions
        completed_pomodoros: Completed sessions, breaks included (derived)
        tags: Ordered tags, unique ignoring case
        is_completed: Completion flag, True iff status is Completed
        completed_at: Completion timestamp, set iff is_completed
        created_at: Creation timestamp
        updated_at: Last modification timestamp
    """

    id: str = Field(default_factory=new_id)
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.Pending
    priority: TaskPriority = TaskPriority.Medium
    project_id: str
    assignee_id: str | None = None
    assignee_name: str | None = None
    due_date: datetime | None = None
    estimated_pomodoros: int | None = Field(default=None, ge=0)
    completed_pomodoros: int = Field(default=0, ge=0)
    tags: list[str] = Field(default_factory=list)
    is_completed: bool = False
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime | None = None


class Pomodoro(BaseModel):
    """A single focus or break interval attached to a task.

    Attributes:
        id: Unique identifier for the session
        task_id: Owning task (required)
        status: Lifecycle status, see :mod:`pomotrack.models.focus.state`
        type: Work, ShortBreak or LongBreak
        start_time: Set when the session starts
        end_time: Set on completion or cancellation
        paused_at: Instant the current pause began, None when not paused
        planned_duration_minutes: Planned length of the interval
        actual_duration_minutes: Focused minutes, set only on completion
        paused_seconds: Accumulated pause time
        interruptions: Number of recorded interruptions
        notes: Optional free text
    """

    id: str = Field(default_factory=new_id)
    task_id: str
    status: PomodoroStatus = PomodoroStatus.Pending
    type: PomodoroType = PomodoroType.Work
    start_time: datetime | None = None
    end_time: datetime | None = None
    paused_at: datetime | None = None
    planned_duration_minutes: int = Field(default=25, ge=1)
    actual_duration_minutes: int | None = None
    paused_seconds: int = Field(default=0, ge=0)
    interruptions: int = Field(default=0, ge=0)
    notes: str | None = None
    created_at: datetime
    updated_at: datetime | None = None
