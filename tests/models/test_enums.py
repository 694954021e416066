"""Tests for status enums and lenient enum parsing."""

from __future__ import annotations

import pytest

from pomotrack.exceptions import InvalidInputError
from pomotrack.models import (
    PomodoroType,
    ProjectStatus,
    TaskPriority,
    TaskStatus,
    parse_enum,
)


class TestTaskStatusAliases:
    def test_legacy_names_are_aliases(self) -> None:
        assert TaskStatus.Todo is TaskStatus.Pending
        assert TaskStatus.Doing is TaskStatus.InProgress
        assert TaskStatus.Done is TaskStatus.Completed

    def test_iteration_skips_aliases(self) -> None:
        assert [s.name for s in TaskStatus] == ["Pending", "InProgress", "Completed", "Cancelled"]

    def test_stable_ordinals(self) -> None:
        assert int(TaskStatus.Cancelled) == 3
        assert int(ProjectStatus.OnHold) == 2


class TestParseEnum:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("done", TaskStatus.Completed),
            ("Doing", TaskStatus.InProgress),
            ("in_progress", TaskStatus.InProgress),
            ("in-progress", TaskStatus.InProgress),
            ("CANCELLED", TaskStatus.Cancelled),
            ("2", TaskStatus.Completed),
            (0, TaskStatus.Pending),
            (TaskStatus.Todo, TaskStatus.Pending),
        ],
    )
    def test_task_status(self, raw, expected) -> None:
        assert parse_enum(TaskStatus, raw) is expected

    def test_other_enums(self) -> None:
        assert parse_enum(TaskPriority, "critical") is TaskPriority.Critical
        assert parse_enum(PomodoroType, "short-break") is PomodoroType.ShortBreak
        assert parse_enum(ProjectStatus, "on hold") is ProjectStatus.OnHold

    @pytest.mark.parametrize("raw", ["finished", "", 9, "-1"])
    def test_unknown_values_raise(self, raw) -> None:
        with pytest.raises(InvalidInputError):
            parse_enum(TaskStatus, raw)
