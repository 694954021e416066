"""Pomodoro focus session commands."""

import asyncio

import typer
from rich.progress import BarColumn, Progress, TextColumn

from pomotrack.exceptions import InvalidInputError, NotFoundError
from pomotrack.models import Pomodoro, PomodoroStatus, PomodoroType, parse_enum
from pomotrack.models.focus import state
from pomotrack.models.focus.state import TimerSnapshot
from pomotrack.services.timer_loop import run_timer
from pomotrack.utils.id_utils import resolve_id
from pomotrack.utils.ui.console import get_console
from pomotrack.utils.ui.formatters import format_session, format_success, print_json

from .context import AppServices, get_services
from .decorators import command_wrapper

app = typer.Typer(help="Pomodoro focus sessions")
console = get_console()

SESSION_EMOJI = {
    PomodoroType.Work: "🍅",
    PomodoroType.ShortBreak: "☕",
    PomodoroType.LongBreak: "🌴",
}


async def _session_id(services: AppServices, session_id: str | None) -> str:
    """Resolve an explicit session ID, or fall back to the live session."""
    if session_id:
        return await resolve_id(session_id, services.store.pomodoros, "Pomodoro")
    active = await services.focus.active_session()
    if active is None:
        raise NotFoundError("Pomodoro", "active session")
    return active.id


def _announce_start(session: Pomodoro) -> None:
    console.print(
        f"{SESSION_EMOJI[session.type]} Started {session.type.name} "
        f"({session.planned_duration_minutes} min) - {session.id[:8]}"
    )


async def _after_completion(services: AppServices, task_id: str) -> None:
    """Show the recommended next session, or start it when auto_start_next is on."""
    upcoming = await services.focus.recommend_next()
    if not services.config.focus.auto_start_next:
        console.print(f"Next up: {SESSION_EMOJI[upcoming]} {upcoming.name}")
        return
    session = await services.focus.create_session(task_id, upcoming)
    _announce_start(await services.focus.start(session.id))


@app.command("start")
@command_wrapper
async def start_session(
    task: str = typer.Option(..., "--task", "-t", help="Task to focus on"),
    session_type: str | None = typer.Option(
        None, "--type", help="work, shortbreak or longbreak (default: recommended)"
    ),
    duration: int | None = typer.Option(None, "--duration", help="Minutes"),
    notes: str | None = typer.Option(None, "--notes"),
) -> None:
    """Create a session for a task and start it."""
    services = get_services()
    active = await services.focus.active_session()
    if active is not None:
        raise InvalidInputError(f"Session {active.id[:8]} is already {active.status.name}")

    task_id = await resolve_id(task, services.store.tasks, "Task")
    kind = parse_enum(PomodoroType, session_type) if session_type else None
    session = await services.focus.create_session(task_id, kind, duration, notes)
    _announce_start(await services.focus.start(session.id))


@app.command("pause")
@command_wrapper
async def pause_session(session_id: str | None = typer.Argument(None)) -> None:
    """Pause the running session."""
    services = get_services()
    session = await services.focus.pause(await _session_id(services, session_id))
    format_success(f"Paused {session.id[:8]}")


@app.command("resume")
@command_wrapper
async def resume_session(session_id: str | None = typer.Argument(None)) -> None:
    """Resume a paused session."""
    services = get_services()
    session = await services.focus.resume(await _session_id(services, session_id))
    format_success(f"Resumed {session.id[:8]}")


@app.command("complete")
@command_wrapper
async def complete_session(session_id: str | None = typer.Argument(None)) -> None:
    """Finish the session now."""
    services = get_services()
    session = await services.focus.complete(await _session_id(services, session_id))
    format_success(
        f"Completed {session.id[:8]} - {session.actual_duration_minutes} min focused"
    )
    await _after_completion(services, session.task_id)


@app.command("cancel")
@command_wrapper
async def cancel_session(session_id: str | None = typer.Argument(None)) -> None:
    """Abandon a session."""
    services = get_services()
    session = await services.focus.cancel(await _session_id(services, session_id))
    format_success(f"Cancelled {session.id[:8]}")


@app.command("interrupt")
@command_wrapper
async def interrupt_session(session_id: str | None = typer.Argument(None)) -> None:
    """Record an interruption against the live session."""
    services = get_services()
    session = await services.focus.interrupt(await _session_id(services, session_id))
    console.print(f"Interruptions: {session.interruptions}")


@app.command("status")
@command_wrapper
async def session_status(
    session_id: str | None = typer.Argument(None),
    output: str = typer.Option("pretty", "--output", "-o"),
) -> None:
    """Show the remaining time of a session."""
    services = get_services()
    if session_id is None and await services.focus.active_session() is None:
        console.print("[yellow]No active session[/yellow]")
        return

    resolved = await _session_id(services, session_id)
    session = await services.store.pomodoros.get(resolved)
    snapshot = await services.focus.snapshot(resolved)
    if output == "json":
        print_json(snapshot.to_dict())
        return
    format_session(session, snapshot)


@app.command("next")
@command_wrapper
async def next_session(output: str = typer.Option("pretty", "--output", "-o")) -> None:
    """Recommend the next session type from completed history."""
    services = get_services()
    cycle = await services.focus.cycle_state()
    pomodoro_config = services.config.focus.to_pomodoro_config()
    if output == "json":
        print_json({**cycle.to_dict(), "duration_minutes": cycle.get_duration(pomodoro_config)})
        return
    console.print(
        f"{SESSION_EMOJI[cycle.current_phase]} Next: [bold]{cycle.current_phase.name}[/bold] "
        f"({cycle.get_duration(pomodoro_config)} min)"
    )
    console.print(f"Cycle {cycle.cycle_number}: {cycle.progress_dots(pomodoro_config)}")


@app.command("run")
@command_wrapper
def run_session(session_id: str | None = typer.Argument(None)) -> None:
    """Run the live countdown until the session ends (Ctrl+C pauses)."""
    services = get_services()
    resolved = asyncio.run(_session_id(services, session_id))
    session = asyncio.run(services.focus.begin_run(resolved))

    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        console=console,
    ) as progress:
        bar = progress.add_task("Starting...", total=1.0)

        def on_tick(snapshot: TimerSnapshot) -> None:
            mins, secs = divmod(snapshot.remaining_seconds, 60)
            progress.update(
                bar,
                completed=snapshot.progress,
                description=f"⏱️  {mins:02d}:{secs:02d} remaining",
            )

        try:
            run_timer(session, services.clock, on_tick=on_tick)
        except KeyboardInterrupt:
            if session.status == PomodoroStatus.InProgress:
                state.pause(session, services.clock.now())
        finally:
            asyncio.run(services.focus.finish_run(session))

    if session.status == PomodoroStatus.Paused:
        console.print("\n[yellow]Session paused[/yellow]")
        return
    console.print(f"\n[bold green]🎉 {session.type.name} complete![/bold green]")
    asyncio.run(_after_completion(services, session.task_id))


@app.command("summary")
@command_wrapper
async def focus_summary(
    task: str | None = typer.Option(None, "--task", "-t", help="Limit to one task"),
    output: str = typer.Option("pretty", "--output", "-o"),
) -> None:
    """Summarize focus sessions."""
    services = get_services()
    task_id = await resolve_id(task, services.store.tasks, "Task") if task else None
    summary = await services.focus.summary(task_id)
    if output == "json":
        print_json(summary)
        return
    console.print(f"\n[bold cyan]🍅 Focus Summary[/bold cyan]\n")
    console.print(f"Work sessions completed: [bold]{summary.completed_work_sessions}[/bold]")
    console.print(f"Completed today: {summary.completed_today}")
    console.print(f"Total focus time: {summary.total_focus_minutes} min")
    console.print(f"Average session: {summary.average_session_minutes} min")
    console.print(f"Cancelled: {summary.cancelled_sessions} · Interruptions: {summary.interruptions}\n")
