"""Task service - Business logic for task operations.

This service layer sits between commands and repositories. It loads
entities, runs them through the completion policy or the query engines,
and persists whatever changed.
"""

from __future__ import annotations

from datetime import datetime

from pomotrack.clock import Clock, SystemClock
from pomotrack.exceptions import InvalidInputError
from pomotrack.models import Task, TaskPriority, TaskStatus
from pomotrack.repositories import ProjectRepository, TaskRepository
from pomotrack.services import project_progress, task_policy
from pomotrack.services.search import Page, TaskQuery, search_tasks
from pomotrack.services.statistics import TaskStats, compute_task_stats


class TaskService:
    """Service for task business logic."""

    def __init__(
        self,
        task_repository: TaskRepository,
        project_repository: ProjectRepository,
        clock: Clock | None = None,
    ):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
            project_repository: Used to check and update the owning project
            clock: Time source, the system clock by default
        """
        self.repository = task_repository
        self.projects = project_repository
        self.clock = clock or SystemClock()

    async def get_task(self, task_id: str) -> Task:
        return await self.repository.get(task_id)

    async def add_task(
        self,
        title: str,
        project_id: str,
        *,
        description: str | None = None,
        priority: TaskPriority = TaskPriority.Medium,
        due_date: datetime | None = None,
        estimated_pomodoros: int | None = None,
        assignee_id: str | None = None,
        assignee_name: str | None = None,
        tags: list[str] | None = None,
    ) -> Task:
        """Create a new task inside an existing project.

        Raises:
            NotFoundError: If the project does not exist
            InvalidInputError: If the title is blank
        """
        if not title or not title.strip():
            raise InvalidInputError("Task title must not be empty")

        project = await self.projects.get(project_id)
        now = self.clock.now()
        task = Task(
            title=title.strip(),
            description=description,
            priority=priority,
            project_id=project_id,
            due_date=due_date,
            estimated_pomodoros=estimated_pomodoros,
            assignee_id=assignee_id,
            assignee_name=assignee_name,
            created_at=now,
        )
        for tag in tags or []:
            task_policy.add_tag(task, tag, now)
        # A fresh task has no modification yet
        task.updated_at = None

        project_progress.add_task(project, task.id, now)
        await self.projects.save(project)
        return await self.repository.save(task)

    async def toggle(self, task_id: str) -> Task:
        task = await self.repository.get(task_id)
        task_policy.toggle(task, self.clock.now())
        return await self.repository.save(task)

    async def set_status(self, task_id: str, status: TaskStatus) -> Task:
        task = await self.repository.get(task_id)
        task_policy.set_status(task, status, self.clock.now())
        return await self.repository.save(task)

    async def bulk_set_status(self, task_ids: list[str], status: TaskStatus) -> list[Task]:
        """Set the status of several tasks. Unknown IDs are skipped."""
        wanted = set(task_ids)
        tasks = await self.repository.list_all(lambda t: t.id in wanted)
        updated = task_policy.bulk_set_status(tasks, status, self.clock.now())
        for task in updated:
            await self.repository.save(task)
        return updated

    async def add_tag(self, task_id: str, tag: str) -> Task:
        task = await self.repository.get(task_id)
        task_policy.add_tag(task, tag, self.clock.now())
        return await self.repository.save(task)

    async def remove_tag(self, task_id: str, tag: str) -> Task:
        task = await self.repository.get(task_id)
        task_policy.remove_tag(task, tag, self.clock.now())
        return await self.repository.save(task)

    async def duplicate(self, task_id: str, new_title: str | None = None) -> Task:
        original = await self.repository.get(task_id)
        now = self.clock.now()
        copy = task_policy.duplicate_task(original, now, new_title=new_title)
        project = await self.projects.get(copy.project_id)
        project_progress.add_task(project, copy.id, now)
        await self.projects.save(project)
        return await self.repository.save(copy)

    async def delete_task(self, task_id: str) -> bool:
        task = await self.repository.get(task_id)
        deleted = await self.repository.delete(task_id)
        project = await self.projects.get(task.project_id)
        project_progress.remove_task(project, task_id, self.clock.now())
        await self.projects.save(project)
        return deleted

    async def search(self, query: TaskQuery) -> Page[Task]:
        tasks = await self.repository.list_all()
        return search_tasks(tasks, query, self.clock.now())

    async def stats(self, project_id: str | None = None) -> TaskStats:
        tasks = await self.repository.list_all()
        return compute_task_stats(tasks, self.clock.now(), project_id=project_id)
