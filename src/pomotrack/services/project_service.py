"""Project service - Business logic for project operations."""

from __future__ import annotations

from datetime import datetime

from pomotrack.clock import Clock, SystemClock
from pomotrack.exceptions import InvalidInputError
from pomotrack.models import Project, ProjectStatus
from pomotrack.repositories import ProjectRepository, TaskRepository
from pomotrack.services.project_progress import ProjectProgress, project_progress
from pomotrack.services.search import Page, ProjectQuery, search_projects
from pomotrack.services.statistics import ProjectStats, compute_project_stats


class ProjectService:
    """Service for project business logic."""

    def __init__(
        self,
        project_repository: ProjectRepository,
        task_repository: TaskRepository,
        clock: Clock | None = None,
    ):
        self.repository = project_repository
        self.tasks = task_repository
        self.clock = clock or SystemClock()

    async def add_project(
        self,
        name: str,
        *,
        description: str | None = None,
        due_date: datetime | None = None,
        status: ProjectStatus = ProjectStatus.Active,
    ) -> Project:
        if not name or not name.strip():
            raise InvalidInputError("Project name must not be empty")
        project = Project(
            name=name.strip(),
            description=description,
            due_date=due_date,
            status=status,
            created_at=self.clock.now(),
        )
        return await self.repository.save(project)

    async def get_project(self, project_id: str) -> Project:
        return await self.repository.get(project_id)

    async def set_status(self, project_id: str, status: ProjectStatus) -> Project:
        project = await self.repository.get(project_id)
        project.status = status
        project.updated_at = self.clock.now()
        return await self.repository.save(project)

    async def progress(self, project_id: str) -> ProjectProgress:
        """Recompute a project's progress from its current tasks.

        Raises:
            NotFoundError: If the project does not exist
        """
        project = await self.repository.get(project_id)
        tasks = await self.tasks.list_all(lambda t: t.project_id == project_id)
        return project_progress(project, tasks, self.clock.now())

    async def search(self, query: ProjectQuery) -> Page[Project]:
        projects = await self.repository.list_all()
        return search_projects(projects, query)

    async def stats(self) -> ProjectStats:
        return compute_project_stats(await self.repository.list_all())
