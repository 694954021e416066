"""Output formatters for different formats."""

import json
from datetime import datetime
from enum import IntEnum
from typing import Any

from pydantic import BaseModel
from rich.table import Table

from pomotrack.models import Pomodoro, Project, Task
from pomotrack.models.focus.state import TimerSnapshot

from .console import get_console

console = get_console()

PRIORITY_STYLES = {
    "Low": "dim",
    "Medium": "white",
    "High": "yellow",
    "Critical": "bold red",
}


def to_display(value: Any) -> Any:
    """Make a model field printable: enum names, ISO dates."""
    if isinstance(value, IntEnum):
        return value.name
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return {k: to_display(v) for k, v in dict(value).items()}
    if isinstance(value, list):
        return [to_display(v) for v in value]
    if isinstance(value, dict):
        return {k: to_display(v) for k, v in value.items()}
    return value


def print_json(data: Any) -> None:
    print(json.dumps(to_display(data), indent=2, default=str))


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, IntEnum):
        return value.name
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_single_item(item: BaseModel | dict) -> None:
    """Format a single item as key-value pairs."""
    data = dict(item) if isinstance(item, BaseModel) else item
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in data.items():
        table.add_row(key.replace("_", " ").title(), format_value(value))

    console.print(table)


def format_task_table(tasks: list[Task], title: str | None = None) -> None:
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Status")
    table.add_column("Priority")
    table.add_column("Due")
    table.add_column("🍅", justify="right")
    table.add_column("Tags")

    for task in tasks:
        estimate = task.estimated_pomodoros if task.estimated_pomodoros is not None else "-"
        table.add_row(
            task.id[:8],
            task.title,
            task.status.name,
            f"[{PRIORITY_STYLES[task.priority.name]}]{task.priority.name}[/]",
            format_value(task.due_date),
            f"{task.completed_pomodoros}/{estimate}",
            format_value(task.tags),
        )

    console.print(table)


def format_project_table(projects: list[Project], progress: dict[str, int] | None = None) -> None:
    if not projects:
        console.print("[yellow]No projects found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Status")
    table.add_column("Due")
    table.add_column("Progress", justify="right")

    for project in projects:
        pct = (progress or {}).get(project.id)
        table.add_row(
            project.id[:8],
            project.name,
            project.status.name,
            format_value(project.due_date),
            "-" if pct is None else f"{pct}%",
        )

    console.print(table)


def format_session(session: Pomodoro, snapshot: TimerSnapshot | None = None) -> None:
    console.print(
        f"[bold]{session.type.name}[/bold] session [cyan]{session.id[:8]}[/cyan] "
        f"- {session.status.name}"
    )
    if snapshot is not None:
        mins, secs = divmod(snapshot.remaining_seconds, 60)
        console.print(f"  Remaining: {mins:02d}:{secs:02d}")
    if session.actual_duration_minutes is not None:
        console.print(f"  Focused: {session.actual_duration_minutes} min")
    if session.interruptions:
        console.print(f"  Interruptions: {session.interruptions}")


def render_progress_bar(value: float, max_value: float, width: int = 10) -> str:
    """Render a progress bar using block characters."""
    if max_value == 0:
        ratio = 0
    else:
        ratio = min(value / max_value, 1.0)
    filled = int(ratio * width)
    return "█" * filled + "░" * (width - filled)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")
