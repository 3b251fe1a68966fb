"""SQLAlchemy implementation of UserRoleRepository."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from skillswap.domain.access.models import UserRole
from skillswap.domain.access.ports import UserRoleRepository
from skillswap.infra.db import tables

from .base import SqlRepository


class SqlUserRoleRepository(SqlRepository[UserRole], UserRoleRepository):
    """Persists role assignments to the user_roles table."""

    entity_type = UserRole

    async def get_by_user_id(self, user_id: uuid.UUID) -> list[UserRole]:
        stmt = (
            select(UserRole)
            .where(self.table.c.user_id == user_id)
            .options(selectinload(UserRole._role))
        )
        return list((await self._session.scalars(stmt)).all())

    async def get_by_role_id(self, role_id: uuid.UUID) -> list[UserRole]:
        stmt = (
            select(UserRole)
            .where(self.table.c.role_id == role_id)
            .options(selectinload(UserRole._user))
        )
        return list((await self._session.scalars(stmt)).all())

    async def get_by_user_and_role(
        self, user_id: uuid.UUID, role_id: uuid.UUID
    ) -> UserRole | None:
        c = self.table.c
        stmt = select(UserRole).where(c.user_id == user_id, c.role_id == role_id)
        return (await self._session.scalars(stmt)).first()

    async def user_has_role(self, user_id: uuid.UUID, role_id: uuid.UUID) -> bool:
        c = self.table.c
        stmt = (
            select(c.id)
            .where(c.user_id == user_id, c.role_id == role_id, c.is_active.is_(True))
            .limit(1)
        )
        return (await self._session.scalar(stmt)) is not None

    async def user_has_role_named(self, user_id: uuid.UUID, role_name: str) -> bool:
        ur, r = self.table.c, tables.roles.c
        stmt = (
            select(ur.id)
            .join_from(self.table, tables.roles, ur.role_id == r.id)
            .where(
                ur.user_id == user_id,
                ur.is_active.is_(True),
                r.name == role_name,
                r.is_active.is_(True),
            )
            .limit(1)
        )
        return (await self._session.scalar(stmt)) is not None
