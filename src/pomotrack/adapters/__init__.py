"""Adapters module - repository implementations for storage backends.

- json_store: a single JSON document under the user data directory
"""

from .json_store import (
    JsonPomodoroRepository,
    JsonProjectRepository,
    JsonStore,
    JsonTaskRepository,
)

__all__ = [
    "JsonStore",
    "JsonTaskRepository",
    "JsonProjectRepository",
    "JsonPomodoroRepository",
]
