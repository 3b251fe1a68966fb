"""SQLAlchemy implementation of SkillCategoryRepository."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from skillswap.domain.skills.models import Skill, SkillCategory
from skillswap.domain.skills.ports import SkillCategoryRepository

from .base import SqlRepository


class SqlSkillCategoryRepository(SqlRepository[SkillCategory], SkillCategoryRepository):
    """Persists SkillCategory entities to the skill_categories table."""

    entity_type = SkillCategory

    async def get_by_name(self, name: str) -> SkillCategory | None:
        stmt = select(SkillCategory).where(self.table.c.name == name)
        return (await self._session.scalars(stmt)).first()

    async def get_by_slug(self, slug: str) -> SkillCategory | None:
        stmt = select(SkillCategory).where(self.table.c.slug == slug)
        return (await self._session.scalars(stmt)).first()

    async def get_active(self) -> list[SkillCategory]:
        stmt = (
            select(SkillCategory)
            .where(self.table.c.is_active.is_(True))
            .order_by(self.table.c.name)
        )
        return list((await self._session.scalars(stmt)).all())

    async def get_with_skills(self, category_id: uuid.UUID) -> SkillCategory | None:
        stmt = (
            select(SkillCategory)
            .where(self.table.c.id == category_id)
            .options(
                selectinload(SkillCategory._skills.and_(Skill._is_active.is_(True)))
            )
            .execution_options(populate_existing=True)
        )
        return (await self._session.scalars(stmt)).first()

    async def get_ordered(self) -> list[SkillCategory]:
        stmt = select(SkillCategory).order_by(self.table.c.name)
        return list((await self._session.scalars(stmt)).all())

    async def name_exists(self, name: str, exclude_id: uuid.UUID | None = None) -> bool:
        stmt = select(self.table.c.id).where(self.table.c.name == name)
        if exclude_id is not None:
            stmt = stmt.where(self.table.c.id != exclude_id)
        return (await self._session.scalar(stmt.limit(1))) is not None
