"""SQLAlchemy implementation of UserRepository."""

from __future__ import annotations

import uuid
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from skillswap.domain.users.models import (
    User,
    UserSkill,
    normalize_email,
    normalize_username,
)
from skillswap.domain.users.ports import UserRepository
from skillswap.infra.db import tables

from .base import SqlRepository


class SqlUserRepository(SqlRepository[User], UserRepository):
    """Persists User entities to the users table."""

    entity_type = User

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(self.table.c.email == normalize_email(email))
        return (await self._session.scalars(stmt)).first()

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(self.table.c.username == normalize_username(username))
        return (await self._session.scalars(stmt)).first()

    async def email_exists(self, email: str, exclude_id: uuid.UUID | None = None) -> bool:
        return await self._value_taken(self.table.c.email, normalize_email(email), exclude_id)

    async def username_exists(
        self, username: str, exclude_id: uuid.UUID | None = None
    ) -> bool:
        return await self._value_taken(
            self.table.c.username, normalize_username(username), exclude_id
        )

    async def get_users_by_skills(self, skill_ids: Sequence[uuid.UUID]) -> list[User]:
        ids = list(skill_ids or ())
        if not ids:
            return []
        holders = select(tables.user_skills.c.user_id).where(
            tables.user_skills.c.skill_id.in_(ids)
        )
        stmt = (
            select(User)
            .where(self.table.c.id.in_(holders))
            .options(selectinload(User._user_skills).selectinload(UserSkill._skill))
            .order_by(self.table.c.username)
        )
        return list((await self._session.scalars(stmt)).all())

    async def get_with_skills(self, user_id: uuid.UUID) -> User | None:
        stmt = (
            select(User)
            .where(self.table.c.id == user_id)
            .options(selectinload(User._user_skills).selectinload(UserSkill._skill))
        )
        return (await self._session.scalars(stmt)).first()

    async def get_with_availability(self, user_id: uuid.UUID) -> User | None:
        stmt = (
            select(User)
            .where(self.table.c.id == user_id)
            .options(selectinload(User._availability))
        )
        return (await self._session.scalars(stmt)).first()

    async def _value_taken(self, column, value: str, exclude_id: uuid.UUID | None) -> bool:
        stmt = select(self.table.c.id).where(column == value)
        if exclude_id is not None:
            stmt = stmt.where(self.table.c.id != exclude_id)
        return (await self._session.scalar(stmt.limit(1))) is not None
