"""Custom exceptions for pomotrack."""

from __future__ import annotations

from typing import Any


class PomotrackError(Exception):
    """Base exception for all pomotrack errors."""


class InvalidTransitionError(PomotrackError):
    """Raised when a state change is not permitted from the current state."""

    def __init__(self, entity: str, current: Any, operation: str):
        self.entity = entity
        self.current = current
        self.operation = operation
        name = getattr(current, "name", current)
        super().__init__(f"Cannot {operation} {entity} in status {name}")


class NotFoundError(PomotrackError):
    """Raised when a referenced task, project or pomodoro does not exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class InvalidInputError(PomotrackError):
    """Raised for malformed queries beyond the documented fallbacks."""
