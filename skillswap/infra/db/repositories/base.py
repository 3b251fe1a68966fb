"""SQLAlchemy implementation of the generic Repository port.

One instance wraps the unit of work's ``AsyncSession`` for one entity
type.  Reads run SELECTs on that session; staging methods only record
intent on the session (``add`` / ``delete``) and never flush, so nothing
reaches the database until ``SqlUnitOfWork.save_changes()``.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import ClassVar, Generic, TypeVar

from sqlalchemy import Table, func, inspect as sa_inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.domain.common.entity import Entity
from skillswap.domain.common.query import FilterSpec, PageSpec, SortOrder, SortSpec
from skillswap.domain.common.repository import (
    Repository,
    require_entities,
    require_entity,
)
from skillswap.infra.db.query import build_conditions, build_order_by

T = TypeVar("T", bound=Entity)


class SqlRepository(Repository[T], Generic[T]):
    """Generic CRUD, predicate queries and paging for one mapped entity."""

    entity_type: ClassVar[type[Entity] | None] = None

    def __init__(self, session: AsyncSession, entity_type: type[T] | None = None) -> None:
        resolved = entity_type or self.entity_type
        if resolved is None:
            raise ValueError(f"{type(self).__name__} needs an entity type")
        self._session = session
        self._entity_type: type[T] = resolved
        self._table: Table = sa_inspect(resolved).local_table

    # -- Reads -------------------------------------------------------------

    async def get_by_id(self, entity_id: uuid.UUID) -> T | None:
        if entity_id is None:
            raise ValueError("entity_id must not be None")
        staged = self._find_staged(entity_id)
        if staged is not None:
            return staged
        return await self._session.get(self._entity_type, entity_id)

    async def get_all(self) -> list[T]:
        result = await self._session.scalars(select(self._entity_type))
        return list(result.all())

    async def find(self, filters: FilterSpec) -> list[T]:
        stmt = self._select(filters)
        result = await self._session.scalars(stmt)
        return list(result.all())

    async def get_first_or_default(self, filters: FilterSpec) -> T | None:
        stmt = self._select(filters).limit(1)
        result = await self._session.scalars(stmt)
        return result.first()

    async def exists(self, filters: FilterSpec) -> bool:
        self._require_filters(filters)
        pk = list(self._table.primary_key.columns)[0]
        stmt = select(pk).where(*build_conditions(self._table, filters)).limit(1)
        return (await self._session.scalar(stmt)) is not None

    async def count(self, filters: FilterSpec | None = None) -> int:
        stmt = (
            select(func.count())
            .select_from(self._table)
            .where(*build_conditions(self._table, filters))
        )
        return int(await self._session.scalar(stmt) or 0)

    async def get_paged(
        self,
        page_number: int,
        page_size: int,
        filters: FilterSpec | None = None,
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[T]:
        # Validate everything before touching the session.
        page = PageSpec(page=page_number, per_page=page_size)
        sort = SortSpec(
            field=order_by or "id",
            order=SortOrder.ASC if ascending else SortOrder.DESC,
        )
        conditions = build_conditions(self._table, filters)
        ordering = build_order_by(self._table, sort)

        stmt = (
            select(self._entity_type)
            .where(*conditions)
            .order_by(*ordering)
            .offset(page.offset)
            .limit(page.limit)
        )
        result = await self._session.scalars(stmt)
        return list(result.all())

    # -- Staged writes -----------------------------------------------------

    def add(self, entity: T) -> T:
        require_entity(entity)
        self._session.add(entity)
        return entity

    def add_range(self, entities: Iterable[T]) -> None:
        self._session.add_all(require_entities(entities))

    def update(self, entity: T) -> T:
        require_entity(entity)
        entity.touch()
        self._session.add(entity)
        return entity

    def update_range(self, entities: Iterable[T]) -> None:
        items = require_entities(entities)
        for entity in items:
            entity.touch()
        self._session.add_all(items)

    async def delete(self, entity: T) -> None:
        require_entity(entity)
        await self._remove(entity)

    async def delete_range(self, entities: Iterable[T]) -> None:
        for entity in require_entities(entities):
            await self._remove(entity)

    async def delete_by_id(self, entity_id: uuid.UUID) -> None:
        entity = await self.get_by_id(entity_id)
        if entity is not None:
            await self._remove(entity)

    async def delete_where(self, filters: FilterSpec) -> int:
        matches = await self.find(filters)
        for entity in matches:
            await self._remove(entity)
        return len(matches)

    # -- Helpers for subclasses -------------------------------------------

    @property
    def table(self) -> Table:
        return self._table

    def _select(self, filters: FilterSpec):
        self._require_filters(filters)
        return select(self._entity_type).where(*build_conditions(self._table, filters))

    def _find_staged(self, entity_id: uuid.UUID) -> T | None:
        """A pending add with this id, not yet visible to SELECTs."""
        for obj in self._session.new:
            if isinstance(obj, self._entity_type) and obj.id == entity_id:
                return obj
        return None

    async def _remove(self, entity: T) -> None:
        # A pending add was never written; dropping it cancels the INSERT
        if entity in self._session.new:
            self._session.expunge(entity)
        else:
            await self._session.delete(entity)

    @staticmethod
    def _require_filters(filters: FilterSpec | None) -> None:
        if filters is None:
            raise ValueError("filters must not be None")
