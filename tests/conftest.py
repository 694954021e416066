"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state: the
logger, config and JSON store all live under *tmp_path*.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest

from pomotrack.adapters.json_store import JsonStore
from pomotrack.clock import ManualClock
from pomotrack.config import get_config_manager, reset_config_manager
from pomotrack.models import Pomodoro, Project, Task
from pomotrack.utils.logger import get_logger, reset_logger

# Monday 2026-01-05 09:00 UTC; the week started Sunday 2026-01-04 09:00.
NOW = datetime(2026, 1, 5, 9, 0, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def _project(**overrides) -> Project:
    fields = {"name": "Website", "created_at": NOW - timedelta(days=30)}
    fields.update(overrides)
    return Project(**fields)


def _task(**overrides) -> Task:
    fields = {
        "title": "Write copy",
        "project_id": "proj-1",
        "created_at": NOW - timedelta(days=10),
    }
    fields.update(overrides)
    return Task(**fields)


def _pomodoro(**overrides) -> Pomodoro:
    fields = {"task_id": "task-1", "created_at": NOW}
    fields.update(overrides)
    return Pomodoro(**fields)


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send the application log to *tmp_path* instead of the user log dir."""
    reset_logger()
    get_logger(tmp_path / "logs")
    yield
    reset_logger()


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock(NOW)


@pytest.fixture()
def store(tmp_path) -> JsonStore:
    return JsonStore(tmp_path / "store.json")


@pytest.fixture()
def cli_env(tmp_path, clock):
    """Point the CLI at a tmp config dir, a tmp store and the manual clock."""
    reset_config_manager()
    with patch("pomotrack.config.user_config_dir", return_value=str(tmp_path / "config")):
        with patch("pomotrack.commands.context.get_clock", return_value=clock):
            manager = get_config_manager()
            manager.set("storage.path", str(tmp_path / "store.json"))
            yield manager
    reset_config_manager()


@pytest.fixture()
def make_project():
    return _project


@pytest.fixture()
def make_task():
    return _task


@pytest.fixture()
def make_pomodoro():
    return _pomodoro
