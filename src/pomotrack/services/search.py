"""Search, filter, sort and paginate tasks and projects in memory."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from pomotrack.exceptions import InvalidInputError
from pomotrack.models import Project, ProjectStatus, Task, TaskPriority, TaskStatus

from .statistics import is_overdue

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 25


class Page(BaseModel, Generic[T]):
    """One page of results plus the total match count."""

    items: list[T]
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.size - 1) // self.size if self.size else 0


class TaskFilters(BaseModel):
    """Filters for querying tasks. Unset filters impose no constraint.

    Attributes:
        status: Exact status
        priority: Exact priority
        project_id: Owning project
        assignee_id: Assignee reference
        tags: Match tasks carrying any of these tags (case-insensitive)
        is_overdue: True for overdue tasks only; False or None adds no constraint
        is_completed: Completion flag
    """

    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    project_id: str | None = None
    assignee_id: str | None = None
    tags: list[str] | None = None
    is_overdue: bool | None = None
    is_completed: bool | None = None


class TaskQuery(BaseModel):
    """Free text, filters, sort and page for a task search."""

    text: str | None = None
    filters: TaskFilters | None = None
    sort_by: str = "createdAt"
    sort_direction: str = "desc"
    page: int = 1
    size: int = DEFAULT_PAGE_SIZE


class ProjectQuery(BaseModel):
    """Search over projects by name/description and status."""

    text: str | None = None
    status: str | None = None
    sort_by: str | None = None
    sort_direction: str | None = None
    page: int = 1
    size: int = 10


def _normalize_key(key: str | None) -> str:
    return (key or "").replace("_", "").replace("-", "").lower()


def _text_key(value: str | None) -> str:
    return (value or "").casefold()


def _updated_or_created(entity: Task | Project) -> datetime:
    return entity.updated_at or entity.created_at


TASK_SORT_KEYS: dict[str, Callable[[Task], Any]] = {
    "title": lambda t: _text_key(t.title),
    "status": lambda t: int(t.status),
    "priority": lambda t: int(t.priority),
    "duedate": lambda t: t.due_date,
    "createdat": lambda t: t.created_at,
    "updatedat": _updated_or_created,
}

PROJECT_SORT_KEYS: dict[str, Callable[[Project], Any]] = {
    "name": lambda p: _text_key(p.name),
    "status": lambda p: int(p.status),
    "duedate": lambda p: p.due_date,
    "created": lambda p: p.created_at,
}


def stable_sort(items: list[T], key: Callable[[T], Any], descending: bool) -> list[T]:
    """Sort keeping source order for ties. Missing values go first when ascending."""

    def wrapped(item: T) -> tuple[bool, Any]:
        value = key(item)
        return (value is not None, value)

    return sorted(items, key=wrapped, reverse=descending)


def paginate(items: Sequence[T], page: int, size: int) -> Page[T]:
    """Slice one page out of ``items``. Pages past the end are empty.

    Raises:
        InvalidInputError: If page or size is below 1.
    """
    if page < 1:
        raise InvalidInputError(f"Page must be 1 or greater, got {page}")
    if size < 1:
        raise InvalidInputError(f"Page size must be 1 or greater, got {size}")
    offset = (page - 1) * size
    return Page(items=list(items[offset : offset + size]), total=len(items), page=page, size=size)


def _matches_text(task: Task, text: str) -> bool:
    needle = text.lower()
    return (
        needle in task.title.lower()
        or (task.description is not None and needle in task.description.lower())
        or any(needle in tag.lower() for tag in task.tags)
    )


def _matches_filters(task: Task, filters: TaskFilters, now: datetime) -> bool:
    if filters.status is not None and task.status != filters.status:
        return False
    if filters.priority is not None and task.priority != filters.priority:
        return False
    if filters.project_id is not None and task.project_id != filters.project_id:
        return False
    if filters.assignee_id and task.assignee_id != filters.assignee_id:
        return False
    if filters.is_completed is not None and task.is_completed != filters.is_completed:
        return False
    if filters.is_overdue and not is_overdue(task, now):
        return False
    if filters.tags:
        wanted = {tag.lower() for tag in filters.tags}
        if not any(tag.lower() in wanted for tag in task.tags):
            return False
    return True


def search_tasks(tasks: Iterable[Task], query: TaskQuery, now: datetime) -> Page[Task]:
    """Filter, sort and paginate tasks.

    Unknown sort keys fall back to newest-created first, whatever direction
    was requested.
    """
    matches = list(tasks)
    if query.text and query.text.strip():
        text = query.text.strip()
        matches = [t for t in matches if _matches_text(t, text)]
    if query.filters is not None:
        matches = [t for t in matches if _matches_filters(t, query.filters, now)]

    key = _normalize_key(query.sort_by)
    if key in TASK_SORT_KEYS:
        descending = (query.sort_direction or "").lower() != "asc"
        matches = stable_sort(matches, TASK_SORT_KEYS[key], descending)
    else:
        matches = stable_sort(matches, TASK_SORT_KEYS["createdat"], descending=True)

    return paginate(matches, query.page, query.size)


def search_projects(projects: Iterable[Project], query: ProjectQuery) -> Page[Project]:
    """Filter, sort and paginate projects.

    Known sort keys are ascending unless the direction is ``desc``; no key
    (or an unknown one) sorts newest-created first. A status of ``all`` or an
    unrecognized status name imposes no constraint.
    """
    matches = list(projects)
    if query.text:
        needle = query.text.lower()
        matches = [
            p
            for p in matches
            if needle in p.name.lower()
            or (p.description is not None and needle in p.description.lower())
        ]

    if query.status and query.status.lower() != "all":
        status = _lookup_project_status(query.status)
        if status is not None:
            matches = [p for p in matches if p.status == status]

    key = _normalize_key(query.sort_by)
    if key in PROJECT_SORT_KEYS:
        descending = (query.sort_direction or "").lower() == "desc"
        matches = stable_sort(matches, PROJECT_SORT_KEYS[key], descending)
    else:
        matches = stable_sort(matches, PROJECT_SORT_KEYS["created"], descending=True)

    return paginate(matches, query.page, query.size)


def _lookup_project_status(raw: str) -> ProjectStatus | None:
    wanted = _normalize_key(raw)
    for name, member in ProjectStatus.__members__.items():
        if name.lower() == wanted:
            return member
    return None
