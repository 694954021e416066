"""Task management commands."""

import typer

from pomotrack.models import TaskPriority, TaskStatus, parse_enum
from pomotrack.services.search import TaskFilters, TaskQuery
from pomotrack.utils.id_utils import resolve_id
from pomotrack.utils.ui.console import get_console
from pomotrack.utils.ui.formatters import (
    format_single_item,
    format_success,
    format_task_table,
    print_json,
    render_progress_bar,
)

from .context import get_services, parse_datetime
from .decorators import command_wrapper

app = typer.Typer(help="Task management commands")
console = get_console()


@app.command("add")
@command_wrapper
async def add_task(
    title: str = typer.Argument(..., help="Task title"),
    project: str = typer.Option(..., "--project", "-p", help="Project ID"),
    description: str | None = typer.Option(None, "--description", "-d"),
    priority: str = typer.Option("medium", "--priority", help="low, medium, high, critical"),
    due: str | None = typer.Option(None, "--due", help="Due date (YYYY-MM-DD)"),
    estimate: int | None = typer.Option(None, "--estimate", help="Estimated pomodoros"),
    tag: list[str] = typer.Option([], "--tag", "-t", help="Tag (repeatable)"),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """Create a new task."""
    services = get_services()
    project_id = await resolve_id(project, services.store.projects, "Project")
    task = await services.tasks.add_task(
        title,
        project_id,
        description=description,
        priority=parse_enum(TaskPriority, priority),
        due_date=parse_datetime(due),
        estimated_pomodoros=estimate,
        tags=tag,
    )
    if output == "json":
        print_json(task)
        return
    format_success(f"Task created: {task.id}")


@app.command("list")
@command_wrapper
async def list_tasks(
    text: str | None = typer.Argument(None, help="Search title, description and tags"),
    status: str | None = typer.Option(None, "--status", help="Filter by status"),
    priority: str | None = typer.Option(None, "--priority", help="Filter by priority"),
    project: str | None = typer.Option(None, "--project", "-p", help="Filter by project"),
    tag: list[str] = typer.Option([], "--tag", "-t", help="Any of these tags"),
    overdue: bool = typer.Option(False, "--overdue", help="Only overdue tasks"),
    completed: bool | None = typer.Option(None, "--completed/--open"),
    sort: str = typer.Option("createdAt", "--sort", help="Sort key"),
    direction: str = typer.Option("desc", "--direction", help="asc or desc"),
    page: int = typer.Option(1, "--page"),
    size: int | None = typer.Option(None, "--size", help="Page size"),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """Search, filter and page through tasks."""
    services = get_services()
    project_id = None
    if project:
        project_id = await resolve_id(project, services.store.projects, "Project")

    query = TaskQuery(
        text=text,
        filters=TaskFilters(
            status=parse_enum(TaskStatus, status) if status else None,
            priority=parse_enum(TaskPriority, priority) if priority else None,
            project_id=project_id,
            tags=tag or None,
            is_overdue=overdue,
            is_completed=completed,
        ),
        sort_by=sort,
        sort_direction=direction,
        page=page,
        size=size or services.config.ui.page_size,
    )
    result = await services.tasks.search(query)

    if output == "json":
        print_json({"items": result.items, "total": result.total, "page": result.page, "size": result.size})
        return
    format_task_table(result.items, title=f"Tasks ({result.total})")
    if result.total_pages > 1:
        console.print(f"[dim]Page {result.page} of {result.total_pages}[/dim]")


@app.command("show")
@command_wrapper
async def show_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    output: str = typer.Option("pretty", "--output", "-o"),
) -> None:
    """Show one task."""
    services = get_services()
    task = await services.tasks.get_task(await resolve_id(task_id, services.store.tasks, "Task"))
    if output == "json":
        print_json(task)
        return
    format_single_item(task)


@app.command("toggle")
@command_wrapper
async def toggle_task(task_id: str = typer.Argument(..., help="Task ID")) -> None:
    """Flip a task between completed and pending."""
    services = get_services()
    task = await services.tasks.toggle(await resolve_id(task_id, services.store.tasks, "Task"))
    state = "completed" if task.is_completed else "reopened"
    format_success(f"Task {state}: {task.title}")


@app.command("status")
@command_wrapper
async def set_status(
    status: str = typer.Argument(..., help="New status (legacy todo/doing/done accepted)"),
    task_ids: list[str] = typer.Argument(..., help="One or more task IDs"),
) -> None:
    """Set the status of one or more tasks."""
    services = get_services()
    new_status = parse_enum(TaskStatus, status)
    ids = [await resolve_id(t, services.store.tasks, "Task") for t in task_ids]
    updated = await services.tasks.bulk_set_status(ids, new_status)
    format_success(f"Updated {len(updated)} task(s) to {new_status.name}")


@app.command("tag")
@command_wrapper
async def tag_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    tag: str = typer.Argument(..., help="Tag to add"),
) -> None:
    """Add a tag to a task."""
    services = get_services()
    task = await services.tasks.add_tag(await resolve_id(task_id, services.store.tasks, "Task"), tag)
    console.print(f"Tags: {', '.join(task.tags) or '-'}")


@app.command("untag")
@command_wrapper
async def untag_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    tag: str = typer.Argument(..., help="Tag to remove"),
) -> None:
    """Remove a tag from a task."""
    services = get_services()
    task = await services.tasks.remove_tag(await resolve_id(task_id, services.store.tasks, "Task"), tag)
    console.print(f"Tags: {', '.join(task.tags) or '-'}")


@app.command("duplicate")
@command_wrapper
async def duplicate_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: str | None = typer.Option(None, "--title", help="Title for the copy"),
) -> None:
    """Copy a task as a new pending task."""
    services = get_services()
    copy = await services.tasks.duplicate(await resolve_id(task_id, services.store.tasks, "Task"), title)
    format_success(f"Task created: {copy.id} ({copy.title})")


@app.command("delete")
@command_wrapper
async def delete_task(task_id: str = typer.Argument(..., help="Task ID")) -> None:
    """Delete a task."""
    services = get_services()
    resolved = await resolve_id(task_id, services.store.tasks, "Task")
    await services.tasks.delete_task(resolved)
    format_success(f"Task deleted: {resolved}")


@app.command("stats")
@command_wrapper
async def task_stats(
    project: str | None = typer.Option(None, "--project", "-p", help="Limit to one project"),
    output: str = typer.Option("pretty", "--output", "-o"),
) -> None:
    """Show task statistics and the productivity score."""
    services = get_services()
    project_id = None
    if project:
        project_id = await resolve_id(project, services.store.projects, "Project")
    stats = await services.tasks.stats(project_id)

    if output == "json":
        print_json(stats)
        return

    console.print("\n[bold cyan]Task Statistics[/bold cyan]\n")
    console.print(f"Total: [bold]{stats.total}[/bold]")
    console.print(
        f"Pending {stats.pending} · In progress {stats.in_progress} · "
        f"Completed {stats.completed} · Cancelled {stats.cancelled}"
    )
    console.print(f"Overdue: [red]{stats.overdue}[/red]")
    console.print(f"Completed this week: {stats.completed_this_week}")
    console.print(f"Average completion time: {stats.average_completion_time_days} days")
    bar = render_progress_bar(stats.productivity_score, 100, width=20)
    console.print(f"Productivity: {bar} [bold]{stats.productivity_score}[/bold]/100\n")
