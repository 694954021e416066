"""Tests for command_wrapper error handling and logging."""

from __future__ import annotations

import pytest
import typer

from pomotrack.commands.decorators import command_wrapper
from pomotrack.exceptions import NotFoundError


class TestCommandWrapper:
    def test_async_command_result(self) -> None:
        @command_wrapper
        async def answer() -> int:
            return 42

        assert answer() == 42

    def test_rejection_logs_exit_code_name(self, tmp_path) -> None:
        @command_wrapper
        async def show() -> None:
            raise NotFoundError("Task", "abc")

        with pytest.raises(typer.Exit) as exc_info:
            show()

        assert exc_info.value.exit_code == 5
        content = (tmp_path / "logs" / "pomotrack.log").read_text()
        assert "command rejected: show" in content
        assert "[ERROR_NOT_FOUND]" in content

    def test_unexpected_error_is_general(self) -> None:
        @command_wrapper
        def broken() -> None:
            raise RuntimeError("boom")

        with pytest.raises(typer.Exit) as exc_info:
            broken()

        assert exc_info.value.exit_code == 1
