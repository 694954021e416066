"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer

from pomotrack.exceptions import PomotrackError
from pomotrack.utils.exit_codes import exit_code_for, get_exit_code_name
from pomotrack.utils.logger import get_logger
from pomotrack.utils.ui.formatters import format_error


def command_wrapper(func: Callable):
    """Run sync or async commands with logging and domain-error exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except PomotrackError as e:
            elapsed = time.monotonic() - start
            code = exit_code_for(e)
            logger.warning(
                "command rejected: %s (%.3fs) - %s: %s [%s]",
                cmd,
                elapsed,
                type(e).__name__,
                str(e),
                get_exit_code_name(code),
            )
            format_error(str(e))
            raise typer.Exit(code=code) from e

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            # Generic fallback for unexpected crashes
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=exit_code_for(e)) from e

    return wrapper
