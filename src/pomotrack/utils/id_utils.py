"""Resolve the short IDs shown in tables back to full entity IDs."""

from __future__ import annotations

from pomotrack.exceptions import InvalidInputError, NotFoundError
from pomotrack.repositories import Repository


def shorten_id(entity_id: str, length: int = 8) -> str:
    return entity_id[:length]


async def resolve_id(short_or_full_id: str, repository: Repository, entity: str) -> str:
    """Resolve an ID prefix to the single matching full ID.

    Raises:
        NotFoundError: If nothing starts with the prefix
        InvalidInputError: If several entities share the prefix
    """
    prefix = short_or_full_id.strip().lower()
    if not prefix:
        raise InvalidInputError(f"{entity} ID must not be empty")

    matches = [
        e.id for e in await repository.list_all(lambda e: e.id.lower().startswith(prefix))
    ]
    if not matches:
        raise NotFoundError(entity, short_or_full_id)
    if short_or_full_id in matches:
        return short_or_full_id
    if len(matches) > 1:
        shown = ", ".join(shorten_id(m, 12) for m in matches[:5])
        raise InvalidInputError(
            f"Ambiguous {entity} ID '{short_or_full_id}' matches: {shown}"
        )
    return matches[0]
