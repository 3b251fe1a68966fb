"""Shared test fakes and fixtures for skill category use case tests.

In-memory implementations of the repository ports and the unit of work.
Each fake stores real entities and evaluates ``FilterSpec`` predicates
against entity attributes, so use cases run unchanged against them.

Other test files can import these fakes directly::

    from tests.unit.use_cases.conftest import FakeUnitOfWork
"""

from __future__ import annotations

import uuid
from typing import Any

import pytest

from skillswap.domain.common.errors import SaveChangesError
from skillswap.domain.common.query import FilterMode, FilterSpec, PageSpec
from skillswap.domain.common.repository import (
    Repository,
    require_entities,
    require_entity,
)
from skillswap.domain.common.uow import (
    TransactionState,
    UnitOfWork,
    UnitOfWorkTransaction,
)
from skillswap.domain.skills.models import Skill, SkillCategory
from skillswap.domain.skills.ports import SkillCategoryRepository, SkillRepository


# ---------------------------------------------------------------------------
# In-memory predicate evaluation
# ---------------------------------------------------------------------------


def matches(entity: Any, filters: FilterSpec | None) -> bool:
    if filters is None:
        return True
    for rf in filters.range_filters:
        value = getattr(entity, rf.field)
        if rf.min_value is not None and value < rf.min_value:
            return False
        if rf.max_value is not None and value > rf.max_value:
            return False
    for cf in filters.categorical_filters:
        hit = getattr(entity, cf.field) in cf.values
        if hit != (cf.mode == FilterMode.INCLUDE):
            return False
    for bf in filters.boolean_filters:
        if bool(getattr(entity, bf.field)) != bf.value:
            return False
    for ts in filters.text_searches:
        value = getattr(entity, ts.field) or ""
        if ts.pattern.lower() not in value.lower():
            return False
    return True


class FakeRepository(Repository):
    """Dict-backed repository; staged rows become visible on save_changes()."""

    def __init__(self) -> None:
        self.rows: dict[uuid.UUID, Any] = {}
        self.pending: list[Any] = []
        self.deleted: list[Any] = []

    async def get_by_id(self, entity_id):
        return self.rows.get(entity_id)

    async def get_all(self):
        return list(self.rows.values())

    async def find(self, filters):
        return [e for e in self.rows.values() if matches(e, filters)]

    async def get_first_or_default(self, filters):
        return next(iter(await self.find(filters)), None)

    async def exists(self, filters):
        return bool(await self.find(filters))

    async def count(self, filters=None):
        return len(await self.find(filters))

    async def get_paged(self, page_number, page_size, filters=None, order_by=None, ascending=True):
        page = PageSpec(page=page_number, per_page=page_size)
        rows = sorted(
            await self.find(filters),
            key=lambda e: getattr(e, order_by or "id"),
            reverse=not ascending,
        )
        return rows[page.offset: page.offset + page.limit]

    def add(self, entity):
        require_entity(entity)
        self.pending.append(entity)
        return entity

    def add_range(self, entities):
        self.pending.extend(require_entities(entities))

    def update(self, entity):
        require_entity(entity)
        entity.touch()
        return entity

    def update_range(self, entities):
        for entity in require_entities(entities):
            entity.touch()

    async def delete(self, entity):
        require_entity(entity)
        self.deleted.append(entity)

    async def delete_range(self, entities):
        self.deleted.extend(require_entities(entities))

    async def delete_by_id(self, entity_id):
        entity = self.rows.get(entity_id)
        if entity is not None:
            self.deleted.append(entity)

    async def delete_where(self, filters):
        hits = await self.find(filters)
        self.deleted.extend(hits)
        return len(hits)

    def flush(self) -> int:
        count = len(self.pending) + len(self.deleted)
        for entity in self.pending:
            self.rows[entity.id] = entity
        for entity in self.deleted:
            self.rows.pop(entity.id, None)
        self.pending.clear()
        self.deleted.clear()
        return count

    def discard(self) -> None:
        self.pending.clear()
        self.deleted.clear()


class FakeSkillCategoryRepository(FakeRepository, SkillCategoryRepository):
    async def get_by_name(self, name):
        return next((c for c in self.rows.values() if c.name == name), None)

    async def get_by_slug(self, slug):
        return next((c for c in self.rows.values() if c.slug == slug), None)

    async def get_active(self):
        return sorted((c for c in self.rows.values() if c.is_active), key=lambda c: c.name)

    async def get_with_skills(self, category_id):
        return self.rows.get(category_id)

    async def get_ordered(self):
        return sorted(self.rows.values(), key=lambda c: c.name)

    async def name_exists(self, name, exclude_id=None):
        return any(c.name == name and c.id != exclude_id for c in self.rows.values())


class FakeSkillRepository(FakeRepository, SkillRepository):
    async def get_by_name(self, name):
        return next((s for s in self.rows.values() if s.name == name), None)

    async def get_by_slug(self, slug):
        return next((s for s in self.rows.values() if s.slug == slug), None)

    async def get_by_category(self, category_id):
        return [s for s in self.rows.values() if s.category_id == category_id]

    async def get_active_skills(self):
        return sorted((s for s in self.rows.values() if s.is_active), key=lambda s: s.name)

    async def search(self, term):
        if not term or not term.strip():
            return []
        needle = term.strip().lower()
        return [
            s for s in self.rows.values()
            if s.is_active and (needle in s.name.lower() or needle in (s.description or "").lower())
        ]

    async def name_exists_in_category(self, name, category_id, exclude_id=None):
        return any(
            s.name == name and s.category_id == category_id and s.id != exclude_id
            for s in self.rows.values()
        )


class FakeTransaction(UnitOfWorkTransaction):
    def __init__(self) -> None:
        self._state = TransactionState.OPEN

    @property
    def state(self):
        return self._state

    async def commit(self):
        self._state = TransactionState.COMMITTED

    async def rollback(self):
        self._state = TransactionState.ROLLED_BACK

    async def close(self):
        if self._state is TransactionState.OPEN:
            self._state = TransactionState.ROLLED_BACK


class FakeUnitOfWork(UnitOfWork):
    """UoW over the fake repositories; records saves and closes.

    Set ``fail_next_save`` to make the next save_changes() raise
    SaveChangesError, optionally running ``on_failed_save`` first to
    simulate a concurrent writer.
    """

    def __init__(self) -> None:
        self.skill_categories = FakeSkillCategoryRepository()
        self.skills = FakeSkillRepository()
        self.saves = 0
        self.closed = 0
        self.fail_next_save = False
        self.on_failed_save = None

    def _repos(self) -> list[FakeRepository]:
        return [self.skill_categories, self.skills]

    def repository(self, entity_type):
        if entity_type is SkillCategory:
            return self.skill_categories
        if entity_type is Skill:
            return self.skills
        raise NotImplementedError(entity_type)

    async def save_changes(self) -> int:
        if self.fail_next_save:
            self.fail_next_save = False
            for repo in self._repos():
                repo.discard()
            if self.on_failed_save is not None:
                self.on_failed_save(self)
            raise SaveChangesError(RuntimeError("UNIQUE constraint failed"))
        self.saves += 1
        return sum(repo.flush() for repo in self._repos())

    async def begin_transaction(self):
        return FakeTransaction()

    async def close(self) -> None:
        self.closed += 1
        for repo in self._repos():
            repo.discard()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


def seed_category(uow: FakeUnitOfWork, name: str = "Music", slug: str | None = None) -> SkillCategory:
    """Put a category straight into the fake store (already 'saved')."""
    category = SkillCategory(name, f"{name} skills", slug or name.lower().replace(" ", "-"))
    uow.skill_categories.rows[category.id] = category
    return category
