"""JSON file storage adapter.

Keeps every project, task and pomodoro in one JSON document. Each write
rewrites the whole file; concurrent writers resolve as last-write-wins.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Generic

from pydantic import ValidationError

from pomotrack.exceptions import InvalidInputError, NotFoundError
from pomotrack.models import Pomodoro, Project, Task
from pomotrack.repositories.repository import (
    EntityT,
    PomodoroRepository,
    Predicate,
    ProjectRepository,
    TaskRepository,
)
from pomotrack.services.task_policy import ensure_consistent

logger = logging.getLogger(__name__)

_COLLECTIONS = ("projects", "tasks", "pomodoros")


def default_store_path() -> Path:
    """Default store location under the user data directory."""
    from platformdirs import user_data_dir

    return Path(user_data_dir("pomotrack")) / "store.json"


class _Collection(Generic[EntityT]):
    """Repository behaviour shared by the three entity kinds."""

    entity_name = "entity"

    def __init__(self, store: "JsonStore", key: str, model: type[EntityT]):
        self._store = store
        self._key = key
        self._model = model

    @property
    def _rows(self) -> dict[str, EntityT]:
        return self._store.data[self._key]

    async def get(self, entity_id: str) -> EntityT:
        try:
            return self._rows[entity_id].model_copy(deep=True)
        except KeyError:
            raise NotFoundError(self.entity_name, entity_id) from None

    async def list_all(self, predicate: Predicate | None = None) -> list[EntityT]:
        rows = [row.model_copy(deep=True) for row in self._rows.values()]
        if predicate is None:
            return rows
        return [row for row in rows if predicate(row)]

    async def save(self, entity: EntityT) -> EntityT:
        self._rows[entity.id] = entity.model_copy(deep=True)
        self._store.flush()
        return entity

    async def delete(self, entity_id: str) -> bool:
        if entity_id not in self._rows:
            raise NotFoundError(self.entity_name, entity_id)
        del self._rows[entity_id]
        self._store.flush()
        return True


class JsonTaskRepository(_Collection[Task], TaskRepository):
    entity_name = "Task"


class JsonProjectRepository(_Collection[Project], ProjectRepository):
    entity_name = "Project"


class JsonPomodoroRepository(_Collection[Pomodoro], PomodoroRepository):
    entity_name = "Pomodoro"


class JsonStore:
    """All repositories backed by a single JSON file."""

    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path is not None else default_store_path()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.data: dict[str, dict] = {key: {} for key in _COLLECTIONS}
        self.load()

        self.projects = JsonProjectRepository(self, "projects", Project)
        self.tasks = JsonTaskRepository(self, "tasks", Task)
        self.pomodoros = JsonPomodoroRepository(self, "pomodoros", Pomodoro)

    def load(self) -> None:
        """Read the file. A missing file is an empty store.

        Raises:
            InvalidInputError: If the file is not valid JSON.
        """
        if not self.path.exists():
            return

        with open(self.path, encoding="utf-8") as f:
            try:
                raw = json.load(f)
            except json.JSONDecodeError as e:
                raise InvalidInputError(f"Corrupted store file {self.path}: {e}") from e

        models = {"projects": Project, "tasks": Task, "pomodoros": Pomodoro}
        for key, model in models.items():
            rows = {}
            for item in raw.get(key, []):
                try:
                    entity = model.model_validate(item)
                    if isinstance(entity, Task):
                        ensure_consistent(entity)
                except (ValidationError, InvalidInputError) as e:
                    logger.warning("skipping invalid %s row: %s", key, e)
                    continue
                rows[entity.id] = entity
            self.data[key] = rows

    def flush(self) -> None:
        """Write the whole store back to disk."""
        payload = {
            key: [row.model_dump(mode="json") for row in self.data[key].values()]
            for key in _COLLECTIONS
        }
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

        # Set secure permissions
        self.path.chmod(0o600)
