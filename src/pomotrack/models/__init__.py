"""pomotrack domain models.

This package contains the Pydantic models for projects, tasks and pomodoro
sessions, plus the enumerations they use.
"""

from .core import Pomodoro, Project, Task, new_id
from .enums import (
    PomodoroStatus,
    PomodoroType,
    ProjectStatus,
    TaskPriority,
    TaskStatus,
    parse_enum,
)

__all__ = [
    # Entities
    "Project",
    "Task",
    "Pomodoro",
    "new_id",
    # Enumerations
    "TaskStatus",
    "TaskPriority",
    "PomodoroStatus",
    "PomodoroType",
    "ProjectStatus",
    "parse_enum",
]
