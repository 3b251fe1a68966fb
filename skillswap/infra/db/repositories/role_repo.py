"""SQLAlchemy implementation of RoleRepository."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from skillswap.domain.access.models import Role, RoleType
from skillswap.domain.access.ports import RoleRepository

from .base import SqlRepository


class SqlRoleRepository(SqlRepository[Role], RoleRepository):
    """Persists Role entities to the roles table."""

    entity_type = Role

    async def get_by_name(self, name: str) -> Role | None:
        stmt = select(Role).where(self.table.c.name == name)
        return (await self._session.scalars(stmt)).first()

    async def get_by_type(self, role_type: RoleType) -> Role | None:
        stmt = select(Role).where(self.table.c.role_type == RoleType(role_type))
        return (await self._session.scalars(stmt)).first()

    async def get_active(self) -> list[Role]:
        stmt = (
            select(Role)
            .where(self.table.c.is_active.is_(True))
            .order_by(self.table.c.name)
        )
        return list((await self._session.scalars(stmt)).all())

    async def get_with_permissions(self, role_id: uuid.UUID) -> Role | None:
        stmt = (
            select(Role)
            .where(self.table.c.id == role_id)
            .options(selectinload(Role._role_permissions))
            .execution_options(populate_existing=True)
        )
        return (await self._session.scalars(stmt)).first()

    async def name_exists(self, name: str, exclude_id: uuid.UUID | None = None) -> bool:
        stmt = select(self.table.c.id).where(self.table.c.name == name)
        if exclude_id is not None:
            stmt = stmt.where(self.table.c.id != exclude_id)
        return (await self._session.scalar(stmt.limit(1))) is not None
