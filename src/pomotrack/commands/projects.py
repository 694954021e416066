"""Project management commands."""

import typer

from pomotrack.models import ProjectStatus, parse_enum
from pomotrack.services.search import ProjectQuery
from pomotrack.utils.id_utils import resolve_id
from pomotrack.utils.ui.console import get_console
from pomotrack.utils.ui.formatters import (
    format_project_table,
    format_success,
    print_json,
    render_progress_bar,
)

from .context import get_services, parse_datetime
from .decorators import command_wrapper

app = typer.Typer(help="Project management commands")
console = get_console()


@app.command("add")
@command_wrapper
async def add_project(
    name: str = typer.Argument(..., help="Project name"),
    description: str | None = typer.Option(None, "--description", "-d"),
    due: str | None = typer.Option(None, "--due", help="Due date (YYYY-MM-DD)"),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """Create a new project."""
    services = get_services()
    project = await services.projects.add_project(
        name, description=description, due_date=parse_datetime(due)
    )
    if output == "json":
        print_json(project)
        return
    format_success(f"Project created: {project.id}")


@app.command("list")
@command_wrapper
async def list_projects(
    text: str | None = typer.Argument(None, help="Search name and description"),
    status: str | None = typer.Option(None, "--status", help="active, completed, onhold or all"),
    sort: str | None = typer.Option(None, "--sort", help="name, status, dueDate or created"),
    order: str | None = typer.Option(None, "--order", help="asc or desc"),
    page: int = typer.Option(1, "--page"),
    size: int = typer.Option(10, "--size"),
    output: str = typer.Option("pretty", "--output", "-o"),
) -> None:
    """List projects with their progress."""
    services = get_services()
    result = await services.projects.search(
        ProjectQuery(text=text, status=status, sort_by=sort, sort_direction=order, page=page, size=size)
    )
    progress = {p.id: (await services.projects.progress(p.id)).progress for p in result.items}

    if output == "json":
        print_json(
            {
                "data": [
                    {**p.model_dump(), "progress": progress[p.id]} for p in result.items
                ],
                "total": result.total,
                "page": result.page,
                "size": result.size,
            }
        )
        return
    format_project_table(result.items, progress)


@app.command("show")
@command_wrapper
async def show_project(
    project_id: str = typer.Argument(..., help="Project ID"),
    output: str = typer.Option("pretty", "--output", "-o"),
) -> None:
    """Show a project's progress."""
    services = get_services()
    resolved = await resolve_id(project_id, services.store.projects, "Project")
    project = await services.projects.get_project(resolved)
    progress = await services.projects.progress(resolved)

    if output == "json":
        print_json({"project": project, "progress": progress})
        return

    console.print(f"\n[bold cyan]{project.name}[/bold cyan] ({project.status.name})")
    if project.description:
        console.print(project.description)
    bar = render_progress_bar(progress.completed_tasks, progress.total_tasks, width=20)
    console.print(
        f"{bar} {progress.progress}% "
        f"({progress.completed_tasks}/{progress.total_tasks} tasks)"
    )
    if progress.overdue_risk:
        console.print("[bold red]Past due date[/bold red]")
    console.print()


@app.command("status")
@command_wrapper
async def set_project_status(
    project_id: str = typer.Argument(..., help="Project ID"),
    status: str = typer.Argument(..., help="active, completed or onhold"),
) -> None:
    """Change a project's status."""
    services = get_services()
    resolved = await resolve_id(project_id, services.store.projects, "Project")
    project = await services.projects.set_status(resolved, parse_enum(ProjectStatus, status))
    format_success(f"Project {project.name} is now {project.status.name}")


@app.command("stats")
@command_wrapper
async def project_stats(output: str = typer.Option("pretty", "--output", "-o")) -> None:
    """Count projects by status."""
    services = get_services()
    stats = await services.projects.stats()
    if output == "json":
        print_json(stats)
        return
    console.print(
        f"Projects: [bold]{stats.total}[/bold] "
        f"(active {stats.active}, completed {stats.completed}, on hold {stats.on_hold})"
    )
