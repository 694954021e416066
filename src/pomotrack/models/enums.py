"""Status, priority and session-type enumerations.

Values are stable ordinals; they are what gets persisted.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TypeVar

from pomotrack.exceptions import InvalidInputError


class TaskStatus(IntEnum):
    """Task lifecycle status.

    ``Todo``, ``Doing`` and ``Done`` are legacy names. They are aliases of
    the same members, so ``TaskStatus.Done is TaskStatus.Completed``.
    """

    Pending = 0
    InProgress = 1
    Completed = 2
    Cancelled = 3

    # Legacy names
    Todo = 0
    Doing = 1
    Done = 2


class TaskPriority(IntEnum):
    Low = 0
    Medium = 1
    High = 2
    Critical = 3


class PomodoroStatus(IntEnum):
    Pending = 0
    InProgress = 1
    Completed = 2
    Cancelled = 3
    Paused = 4


class PomodoroType(IntEnum):
    Work = 0
    ShortBreak = 1
    LongBreak = 2


class ProjectStatus(IntEnum):
    Active = 0
    Completed = 1
    OnHold = 2


E = TypeVar("E", bound=IntEnum)


def _normalize(name: str) -> str:
    return name.replace("_", "").replace("-", "").replace(" ", "").lower()


def parse_enum(enum_cls: type[E], raw: str | int | E) -> E:
    """Resolve a member from a name (any case, aliases included) or ordinal.

    Raises:
        InvalidInputError: If nothing in ``enum_cls`` matches.
    """
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, int):
        try:
            return enum_cls(raw)
        except ValueError as e:
            raise InvalidInputError(
                f"Invalid {enum_cls.__name__} value: {raw}"
            ) from e

    text = str(raw).strip()
    if text.lstrip("-").isdigit():
        return parse_enum(enum_cls, int(text))

    wanted = _normalize(text)
    # __members__ includes aliases (Todo, Doing, Done)
    for name, member in enum_cls.__members__.items():
        if _normalize(name) == wanted:
            return member

    choices = ", ".join(m.name for m in enum_cls)
    raise InvalidInputError(
        f"Invalid {enum_cls.__name__}: {raw!r} (expected one of: {choices})"
    )
