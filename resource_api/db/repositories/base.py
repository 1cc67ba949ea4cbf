"""
Base repository class with shared identity and lookup utilities.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Generic, Protocol, TypeVar

from ...exceptions import NotFoundError

LOGGER = logging.getLogger(__name__)


class _Identified(Protocol):
    @property
    def id(self) -> int: ...


EntityT = TypeVar("EntityT", bound=_Identified)


class BaseRepository(Generic[EntityT]):
    """
    Base class for all in-memory repositories.

    Owns one insertion-ordered collection and a monotonic identity counter.
    Mutations run under ``self._lock``; reads never take it and only ever see
    whole entities because entities are immutable and replaced in one step.
    """

    entity_name = "Entity"

    def __init__(self) -> None:
        self._items: list[EntityT] = []
        self._next_id = 1
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._items)

    @property
    def next_id(self) -> int:
        """Identity the next successful create will receive."""
        return self._next_id

    async def list_all(self) -> list[EntityT]:
        """Return a snapshot of all entities in insertion order."""
        return list(self._items)

    async def get(self, entity_id: int) -> EntityT:
        """Return the entity with ``entity_id`` or raise NotFoundError."""
        return self._items[self._index_of(entity_id)]

    async def delete(self, entity_id: int) -> None:
        """
        Remove the entity with ``entity_id``.

        The remaining entities keep their relative order and the identity is
        never handed out again.
        """
        async with self._lock:
            index = self._index_of(entity_id)
            del self._items[index]
        LOGGER.info("Deleted %s %d", self.entity_name.lower(), entity_id)

    def _index_of(self, entity_id: int) -> int:
        for index, item in enumerate(self._items):
            if item.id == entity_id:
                return index
        raise NotFoundError(
            f"{self.entity_name} not found",
            context={"id": entity_id},
        )

    def _allocate_id(self) -> int:
        """Hand out the next identity. Call only once the write is certain to succeed."""
        entity_id = self._next_id
        self._next_id += 1
        return entity_id


__all__ = ["BaseRepository"]
