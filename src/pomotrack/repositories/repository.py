"""Repository abstraction layer for pomotrack.

This module defines the abstract base classes (interfaces) the services use
to load and persist entities. The engine itself never touches storage: the
services load a snapshot, hand it to the pure core, and save what comes back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Generic, TypeVar

from pomotrack.models import Pomodoro, Project, Task

EntityT = TypeVar("EntityT", Task, Project, Pomodoro)
Predicate = Callable[[EntityT], bool]


class Repository(ABC, Generic[EntityT]):
    """Abstract base class for entity persistence operations."""

    @abstractmethod
    async def get(self, entity_id: str) -> EntityT:
        """Get a specific entity by ID.

        Args:
            entity_id: Unique identifier for the entity

        Returns:
            The stored entity

        Raises:
            NotFoundError: If the entity does not exist
        """
        raise NotImplementedError("Repository.get() must be implemented by adapter")

    @abstractmethod
    async def list_all(self, predicate: Predicate | None = None) -> list[EntityT]:
        """List entities in insertion order, optionally filtered.

        Args:
            predicate: Keep only entities for which this returns True

        Returns:
            Matching entities
        """
        raise NotImplementedError(
            "Repository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def save(self, entity: EntityT) -> EntityT:
        """Insert or replace an entity. Last write wins.

        Args:
            entity: Entity to persist

        Returns:
            The persisted entity
        """
        raise NotImplementedError("Repository.save() must be implemented by adapter")

    @abstractmethod
    async def delete(self, entity_id: str) -> bool:
        """Delete an entity.

        Args:
            entity_id: Unique identifier for the entity

        Returns:
            True if deletion was successful

        Raises:
            NotFoundError: If the entity does not exist
        """
        raise NotImplementedError(
            "Repository.delete() must be implemented by adapter"
        )


class TaskRepository(Repository[Task]):
    """Persistence port for tasks."""


class ProjectRepository(Repository[Project]):
    """Persistence port for projects."""


class PomodoroRepository(Repository[Pomodoro]):
    """Persistence port for pomodoro sessions."""
