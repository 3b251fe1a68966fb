"""SQLAlchemy implementation of UserAvailabilityRepository."""

from __future__ import annotations

import uuid
from datetime import time

from sqlalchemy import select

from skillswap.domain.users.models import DayOfWeek, UserAvailability
from skillswap.domain.users.ports import UserAvailabilityRepository

from .base import SqlRepository


class SqlUserAvailabilityRepository(
    SqlRepository[UserAvailability], UserAvailabilityRepository
):
    """Persists weekly slots to the user_availability table."""

    entity_type = UserAvailability

    async def get_by_user_id(self, user_id: uuid.UUID) -> list[UserAvailability]:
        c = self.table.c
        stmt = (
            select(UserAvailability)
            .where(c.user_id == user_id)
            .order_by(c.day_of_week, c.start_time)
        )
        return list((await self._session.scalars(stmt)).all())

    async def get_by_user_and_day(
        self, user_id: uuid.UUID, day_of_week: DayOfWeek
    ) -> list[UserAvailability]:
        c = self.table.c
        stmt = (
            select(UserAvailability)
            .where(c.user_id == user_id, c.day_of_week == int(day_of_week))
            .order_by(c.start_time)
        )
        return list((await self._session.scalars(stmt)).all())

    async def get_users_available_at(
        self, day_of_week: DayOfWeek, at: time
    ) -> list[UserAvailability]:
        c = self.table.c
        stmt = (
            select(UserAvailability)
            .where(
                c.day_of_week == int(day_of_week),
                c.is_active.is_(True),
                c.start_time <= at,
                c.end_time >= at,
            )
            .order_by(c.start_time)
        )
        return list((await self._session.scalars(stmt)).all())
