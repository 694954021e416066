"""Repository interfaces for pomotrack.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" in the Hexagonal
Architecture.

Implementations (Adapters) are in:
- pomotrack.adapters.json_store (local JSON file)
"""

from .repository import (
    PomodoroRepository,
    ProjectRepository,
    Repository,
    TaskRepository,
)

__all__ = [
    "Repository",
    "TaskRepository",
    "ProjectRepository",
    "PomodoroRepository",
]
