"""SQLAlchemy implementation of RolePermissionRepository.

Permissions are stored as their integer value.  A name that does not
resolve to a :class:`Permission` matches no rows instead of raising.
"""

from __future__ import annotations

import uuid

from sqlalchemy import select

from skillswap.domain.access.models import Permission, RolePermission
from skillswap.domain.access.ports import RolePermissionRepository

from .base import SqlRepository


class SqlRolePermissionRepository(SqlRepository[RolePermission], RolePermissionRepository):
    """Persists permission grants to the role_permissions table."""

    entity_type = RolePermission

    async def get_by_role_id(self, role_id: uuid.UUID) -> list[RolePermission]:
        c = self.table.c
        stmt = select(RolePermission).where(c.role_id == role_id).order_by(c.permission)
        return list((await self._session.scalars(stmt)).all())

    async def get_by_permission(self, permission: Permission | str) -> list[RolePermission]:
        resolved = Permission.parse(permission)
        if resolved is None:
            return []
        stmt = select(RolePermission).where(self.table.c.permission == int(resolved))
        return list((await self._session.scalars(stmt)).all())

    async def get_by_role_and_permission(
        self, role_id: uuid.UUID, permission: Permission | str
    ) -> RolePermission | None:
        resolved = Permission.parse(permission)
        if resolved is None:
            return None
        c = self.table.c
        stmt = select(RolePermission).where(
            c.role_id == role_id, c.permission == int(resolved)
        )
        return (await self._session.scalars(stmt)).first()

    async def role_has_permission(
        self, role_id: uuid.UUID, permission: Permission | str
    ) -> bool:
        resolved = Permission.parse(permission)
        if resolved is None:
            return False
        c = self.table.c
        stmt = (
            select(c.id)
            .where(
                c.role_id == role_id,
                c.permission == int(resolved),
                c.is_granted.is_(True),
            )
            .limit(1)
        )
        return (await self._session.scalar(stmt)) is not None
