"""Wiring shared by the command modules: store, clock and services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from pomotrack.adapters.json_store import JsonStore
from pomotrack.clock import Clock, SystemClock
from pomotrack.config import Config, get_config_manager
from pomotrack.exceptions import InvalidInputError
from pomotrack.services.focus_service import FocusService
from pomotrack.services.project_service import ProjectService
from pomotrack.services.task_service import TaskService
from pomotrack.utils.ui.console import get_console


@dataclass
class AppServices:
    config: Config
    store: JsonStore
    clock: Clock
    tasks: TaskService
    projects: ProjectService
    focus: FocusService


def get_clock() -> Clock:
    return SystemClock()


def get_services() -> AppServices:
    """Build the services over the configured JSON store."""
    config = get_config_manager().config
    get_console().no_color = not config.ui.color
    path = Path(config.storage.path) if config.storage.path else None
    store = JsonStore(path)
    clock = get_clock()
    return AppServices(
        config=config,
        store=store,
        clock=clock,
        tasks=TaskService(store.tasks, store.projects, clock),
        projects=ProjectService(store.projects, store.tasks, clock),
        focus=FocusService(store.tasks, store.pomodoros, clock, config.focus),
    )


def parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO date or datetime from the command line. Naive means UTC."""
    if value is None:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise InvalidInputError(f"Invalid date: {value!r} (use YYYY-MM-DD[THH:MM])") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
