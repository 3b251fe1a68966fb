"""SQLAlchemy implementation of SkillRepository."""

from __future__ import annotations

import uuid

from sqlalchemy import func, or_, select

from skillswap.domain.skills.models import Skill
from skillswap.domain.skills.ports import SkillRepository

from .base import SqlRepository


class SqlSkillRepository(SqlRepository[Skill], SkillRepository):
    """Persists Skill entities to the skills table."""

    entity_type = Skill

    async def get_by_name(self, name: str) -> Skill | None:
        stmt = select(Skill).where(self.table.c.name == name)
        return (await self._session.scalars(stmt)).first()

    async def get_by_slug(self, slug: str) -> Skill | None:
        stmt = select(Skill).where(self.table.c.slug == slug)
        return (await self._session.scalars(stmt)).first()

    async def get_by_category(self, category_id: uuid.UUID) -> list[Skill]:
        stmt = (
            select(Skill)
            .where(self.table.c.category_id == category_id)
            .order_by(self.table.c.name)
        )
        return list((await self._session.scalars(stmt)).all())

    async def get_active_skills(self) -> list[Skill]:
        stmt = (
            select(Skill)
            .where(self.table.c.is_active.is_(True))
            .order_by(self.table.c.name)
        )
        return list((await self._session.scalars(stmt)).all())

    async def search(self, term: str) -> list[Skill]:
        if not term or not term.strip():
            return []
        needle = term.strip().lower()
        c = self.table.c
        stmt = (
            select(Skill)
            .where(
                c.is_active.is_(True),
                or_(
                    func.lower(c.name).contains(needle, autoescape=True),
                    func.lower(c.description).contains(needle, autoescape=True),
                ),
            )
            .order_by(c.name)
        )
        return list((await self._session.scalars(stmt)).all())

    async def name_exists_in_category(
        self,
        name: str,
        category_id: uuid.UUID,
        exclude_id: uuid.UUID | None = None,
    ) -> bool:
        c = self.table.c
        stmt = select(c.id).where(c.name == name, c.category_id == category_id)
        if exclude_id is not None:
            stmt = stmt.where(c.id != exclude_id)
        return (await self._session.scalar(stmt.limit(1))) is not None
