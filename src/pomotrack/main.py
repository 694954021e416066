"""Main entry point for the pomotrack CLI."""

import typer

from pomotrack import __version__
from pomotrack.commands import config, focus, projects, tasks
from pomotrack.utils.ui.console import get_console

app = typer.Typer(
    name="pomotrack",
    help="Pomodoro sessions, tasks and project progress from the command line",
    no_args_is_help=True,
)

console = get_console()


app.add_typer(focus.app, name="focus", help="Pomodoro focus sessions")
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(projects.app, name="projects", help="Project management commands")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]pomotrack[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
