"""SQLAlchemy implementation of UserPreferencesRepository."""

from __future__ import annotations

import uuid

from sqlalchemy import select

from skillswap.domain.users.models import UserPreferences
from skillswap.domain.users.ports import UserPreferencesRepository

from .base import SqlRepository


class SqlUserPreferencesRepository(SqlRepository[UserPreferences], UserPreferencesRepository):
    entity_type = UserPreferences

    async def get_by_user_id(self, user_id: uuid.UUID) -> UserPreferences | None:
        stmt = select(UserPreferences).where(self.table.c.user_id == user_id)
        return (await self._session.scalars(stmt)).first()
