"""SQLAlchemy implementation of UserSkillRepository."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from skillswap.domain.users.models import SkillType, UserSkill
from skillswap.domain.users.ports import UserSkillRepository

from .base import SqlRepository


class SqlUserSkillRepository(SqlRepository[UserSkill], UserSkillRepository):
    """Persists UserSkill links to the user_skills table."""

    entity_type = UserSkill

    async def get_by_user_id(self, user_id: uuid.UUID) -> list[UserSkill]:
        stmt = (
            select(UserSkill)
            .where(self.table.c.user_id == user_id)
            .options(selectinload(UserSkill._skill))
        )
        return list((await self._session.scalars(stmt)).all())

    async def get_by_skill_id(self, skill_id: uuid.UUID) -> list[UserSkill]:
        stmt = (
            select(UserSkill)
            .where(self.table.c.skill_id == skill_id)
            .options(selectinload(UserSkill._user))
        )
        return list((await self._session.scalars(stmt)).all())

    async def get_by_user_and_skill(
        self, user_id: uuid.UUID, skill_id: uuid.UUID
    ) -> UserSkill | None:
        c = self.table.c
        stmt = select(UserSkill).where(c.user_id == user_id, c.skill_id == skill_id)
        return (await self._session.scalars(stmt)).first()

    async def get_by_proficiency_level(self, level: int) -> list[UserSkill]:
        stmt = (
            select(UserSkill)
            .where(self.table.c.proficiency_level == level)
            .options(selectinload(UserSkill._skill), selectinload(UserSkill._user))
        )
        return list((await self._session.scalars(stmt)).all())

    async def get_teachable_skills(self, user_id: uuid.UUID) -> list[UserSkill]:
        return await self._by_type(user_id, SkillType.CAN_TEACH)

    async def get_learning_skills(self, user_id: uuid.UUID) -> list[UserSkill]:
        return await self._by_type(user_id, SkillType.WANT_TO_LEARN)

    async def user_has_skill(self, user_id: uuid.UUID, skill_id: uuid.UUID) -> bool:
        c = self.table.c
        stmt = select(c.id).where(c.user_id == user_id, c.skill_id == skill_id).limit(1)
        return (await self._session.scalar(stmt)) is not None

    async def _by_type(self, user_id: uuid.UUID, skill_type: SkillType) -> list[UserSkill]:
        c = self.table.c
        stmt = (
            select(UserSkill)
            .where(c.user_id == user_id, c.skill_type == skill_type)
            .options(selectinload(UserSkill._skill))
        )
        return list((await self._session.scalars(stmt)).all())
