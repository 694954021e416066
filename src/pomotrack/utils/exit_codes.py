"""
Exit codes for the pomotrack CLI.

Each domain error maps to its own code so scripts can tell a rejected
action from a crash.
"""

from pomotrack.exceptions import (
    InvalidInputError,
    InvalidTransitionError,
    NotFoundError,
)

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or query
ERROR_INVALID_ARGS = 2

# Resource not found
ERROR_NOT_FOUND = 5

# State change not allowed from the current state
ERROR_INVALID_TRANSITION = 7


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
        ERROR_INVALID_TRANSITION: "ERROR_INVALID_TRANSITION",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def exit_code_for(error: Exception) -> int:
    """Pick the exit code for an exception raised by a command."""
    if isinstance(error, InvalidTransitionError):
        return ERROR_INVALID_TRANSITION
    if isinstance(error, NotFoundError):
        return ERROR_NOT_FOUND
    if isinstance(error, InvalidInputError):
        return ERROR_INVALID_ARGS
    return ERROR_GENERAL
