"""Tests for TaskService and ProjectService over a JSON store."""

from __future__ import annotations

from datetime import timedelta

import pytest
import pytest_asyncio

from pomotrack.exceptions import InvalidInputError, NotFoundError
from pomotrack.models import ProjectStatus, TaskStatus
from pomotrack.services.project_service import ProjectService
from pomotrack.services.search import ProjectQuery, TaskFilters, TaskQuery
from pomotrack.services.task_service import TaskService


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def tasks(store, clock):
    return TaskService(store.tasks, store.projects, clock)


@pytest.fixture()
def projects(store, clock):
    return ProjectService(store.projects, store.tasks, clock)


@pytest_asyncio.fixture
async def project(projects):
    return await projects.add_project("Website", description="Company site")


# ---------------------------------------------------------------------------
# TaskService
# ---------------------------------------------------------------------------


class TestAddTask:
    @pytest.mark.asyncio
    async def test_creates_pending_task_in_project(self, tasks, store, project, clock) -> None:
        task = await tasks.add_task("  Write copy ", project.id, tags=["copy", "COPY", " "])

        assert task.title == "Write copy"
        assert task.status == TaskStatus.Pending
        assert task.tags == ["copy"]
        assert task.created_at == clock.now()
        assert task.updated_at is None
        assert (await store.projects.get(project.id)).task_ids == [task.id]

    @pytest.mark.asyncio
    async def test_unknown_project(self, tasks) -> None:
        with pytest.raises(NotFoundError):
            await tasks.add_task("Orphan", "missing")

    @pytest.mark.asyncio
    async def test_blank_title(self, tasks, project) -> None:
        with pytest.raises(InvalidInputError):
            await tasks.add_task("   ", project.id)


class TestTaskUpdates:
    @pytest.mark.asyncio
    async def test_toggle_round_trip(self, tasks, project) -> None:
        task = await tasks.add_task("Write copy", project.id)

        done = await tasks.toggle(task.id)
        assert done.is_completed and done.completed_at is not None

        reopened = await tasks.toggle(task.id)
        assert reopened.status == TaskStatus.Pending
        assert not reopened.is_completed
        assert reopened.completed_at is None

    @pytest.mark.asyncio
    async def test_bulk_status_skips_unknown_ids(self, tasks, store, project) -> None:
        a = await tasks.add_task("A", project.id)
        b = await tasks.add_task("B", project.id)

        updated = await tasks.bulk_set_status([a.id, b.id, "missing"], TaskStatus.Done)

        assert len(updated) == 2
        for task_id in (a.id, b.id):
            stored = await store.tasks.get(task_id)
            assert stored.is_completed and stored.completed_at is not None

        await tasks.bulk_set_status([a.id, b.id], TaskStatus.InProgress)
        for task_id in (a.id, b.id):
            stored = await store.tasks.get(task_id)
            assert not stored.is_completed and stored.completed_at is None

    @pytest.mark.asyncio
    async def test_tags_are_persisted(self, tasks, store, project) -> None:
        task = await tasks.add_task("Write copy", project.id)

        await tasks.add_tag(task.id, "urgent")
        await tasks.add_tag(task.id, "home")
        await tasks.remove_tag(task.id, "URGENT")

        assert (await store.tasks.get(task.id)).tags == ["home"]

    @pytest.mark.asyncio
    async def test_duplicate_joins_the_same_project(self, tasks, store, project) -> None:
        task = await tasks.add_task("Write copy", project.id)
        await tasks.toggle(task.id)

        copy = await tasks.duplicate(task.id)

        assert copy.title == "Copy of Write copy"
        assert not copy.is_completed
        assert (await store.projects.get(project.id)).task_ids == [task.id, copy.id]

    @pytest.mark.asyncio
    async def test_delete_removes_from_project(self, tasks, store, project) -> None:
        task = await tasks.add_task("Write copy", project.id)

        assert await tasks.delete_task(task.id)

        assert (await store.projects.get(project.id)).task_ids == []
        with pytest.raises(NotFoundError):
            await tasks.get_task(task.id)

    @pytest.mark.asyncio
    async def test_operations_on_deleted_task(self, tasks, project) -> None:
        task = await tasks.add_task("Write copy", project.id)
        await tasks.delete_task(task.id)

        with pytest.raises(NotFoundError):
            await tasks.toggle(task.id)


class TestTaskQueries:
    @pytest.mark.asyncio
    async def test_search(self, tasks, project, clock) -> None:
        for title in ("Zebra", "Alpha", "Beta"):
            await tasks.add_task(title, project.id)
            clock.advance(minutes=1)

        page = await tasks.search(TaskQuery(sort_by="title", sort_direction="asc"))
        assert [t.title for t in page.items] == ["Alpha", "Beta", "Zebra"]

        page = await tasks.search(TaskQuery(text="zeb", filters=TaskFilters(is_completed=False)))
        assert [t.title for t in page.items] == ["Zebra"]

    @pytest.mark.asyncio
    async def test_stats(self, tasks, project, clock) -> None:
        first = await tasks.add_task("A", project.id, due_date=clock.now() + timedelta(hours=1))
        await tasks.add_task("B", project.id)
        await tasks.toggle(first.id)
        clock.advance(minutes=90)

        stats = await tasks.stats()

        assert stats.total == 2
        assert stats.completed == 1
        assert stats.overdue == 0
        assert stats.completed_this_week == 1


# ---------------------------------------------------------------------------
# ProjectService
# ---------------------------------------------------------------------------


class TestProjectService:
    @pytest.mark.asyncio
    async def test_progress_two_of_four(self, projects, tasks, project) -> None:
        created = [await tasks.add_task(f"T{i}", project.id) for i in range(4)]
        await tasks.toggle(created[0].id)
        await tasks.toggle(created[3].id)

        progress = await projects.progress(project.id)

        assert progress.progress == 50
        assert progress.total_tasks == 4
        assert not progress.overdue_risk

    @pytest.mark.asyncio
    async def test_overdue_risk(self, projects, clock) -> None:
        late = await projects.add_project("Late", due_date=clock.now() - timedelta(days=1))
        assert (await projects.progress(late.id)).overdue_risk

    @pytest.mark.asyncio
    async def test_progress_of_unknown_project(self, projects) -> None:
        with pytest.raises(NotFoundError):
            await projects.progress("missing")

    @pytest.mark.asyncio
    async def test_blank_name(self, projects) -> None:
        with pytest.raises(InvalidInputError):
            await projects.add_project(" ")

    @pytest.mark.asyncio
    async def test_status_search_and_stats(self, projects, project, clock) -> None:
        clock.advance(minutes=1)
        other = await projects.add_project("Book")
        await projects.set_status(other.id, ProjectStatus.OnHold)

        page = await projects.search(ProjectQuery(status="active"))
        assert [p.name for p in page.items] == ["Website"]

        page = await projects.search(ProjectQuery())
        assert [p.name for p in page.items] == ["Book", "Website"]

        stats = await projects.stats()
        assert (stats.total, stats.active, stats.on_hold) == (2, 1, 1)
