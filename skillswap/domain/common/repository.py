"""Generic repository port.

Every entity-specific repository extends ``Repository[T]`` with its own
lookups.  Reads hit the backing store and may suspend; mutations only
stage changes on the unit of work's session.  Nothing is written until
``UnitOfWork.save_changes()`` runs.

Note: No infrastructure types (Session, Engine) appear here.
Repositories receive their session through the UnitOfWork.
"""

from __future__ import annotations

import abc
import uuid
from collections.abc import Iterable, Sequence
from typing import Generic, TypeVar

from .entity import Entity
from .query import FilterSpec

T = TypeVar("T", bound=Entity)


class Repository(abc.ABC, Generic[T]):
    """Uniform CRUD and query surface for one entity type."""

    # -- Reads -------------------------------------------------------------

    @abc.abstractmethod
    async def get_by_id(self, entity_id: uuid.UUID) -> T | None:
        """Return the entity with this id, or None."""
        ...

    @abc.abstractmethod
    async def get_all(self) -> list[T]:
        """Return every row.  Unbounded; prefer get_paged on large tables."""
        ...

    @abc.abstractmethod
    async def find(self, filters: FilterSpec) -> list[T]:
        ...

    @abc.abstractmethod
    async def get_first_or_default(self, filters: FilterSpec) -> T | None:
        ...

    @abc.abstractmethod
    async def exists(self, filters: FilterSpec) -> bool:
        """True if any row matches, without materialising entities."""
        ...

    @abc.abstractmethod
    async def count(self, filters: FilterSpec | None = None) -> int:
        ...

    @abc.abstractmethod
    async def get_paged(
        self,
        page_number: int,
        page_size: int,
        filters: FilterSpec | None = None,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[T]:
        """Return one 1-based page of results.

        Raises ValueError for ``page_number <= 0`` or ``page_size <= 0``
        before any I/O.  Without ``order_by`` rows are ordered by id so
        repeated calls over unchanged data return identical pages.
        """
        ...

    # -- Staged writes -----------------------------------------------------

    @abc.abstractmethod
    def add(self, entity: T) -> T:
        ...

    @abc.abstractmethod
    def add_range(self, entities: Iterable[T]) -> None:
        ...

    @abc.abstractmethod
    def update(self, entity: T) -> T:
        """Refresh ``updated_at`` and stage the entity for update."""
        ...

    @abc.abstractmethod
    def update_range(self, entities: Iterable[T]) -> None:
        ...

    @abc.abstractmethod
    async def delete(self, entity: T) -> None:
        ...

    @abc.abstractmethod
    async def delete_range(self, entities: Iterable[T]) -> None:
        ...

    @abc.abstractmethod
    async def delete_by_id(self, entity_id: uuid.UUID) -> None:
        """Stage removal of the entity with this id; no-op if absent."""
        ...

    @abc.abstractmethod
    async def delete_where(self, filters: FilterSpec) -> int:
        """Stage removal of every match and return how many were staged."""
        ...


def require_entity(entity: object, name: str = "entity") -> None:
    if entity is None:
        raise ValueError(f"{name} must not be None")


def require_entities(entities: Iterable[object] | None) -> Sequence[object]:
    if entities is None:
        raise ValueError("entities must not be None")
    items = list(entities)
    for item in items:
        require_entity(item)
    return items
