"""Repository ports for roles and permissions."""

from __future__ import annotations

import abc
import uuid

from ..common.repository import Repository
from .models import Permission, Role, RolePermission, RoleType, UserRole


class RoleRepository(Repository[Role]):
    """Persist and retrieve roles."""

    @abc.abstractmethod
    async def get_by_name(self, name: str) -> Role | None:
        ...

    @abc.abstractmethod
    async def get_by_type(self, role_type: RoleType) -> Role | None:
        ...

    @abc.abstractmethod
    async def get_active(self) -> list[Role]:
        ...

    @abc.abstractmethod
    async def get_with_permissions(self, role_id: uuid.UUID) -> Role | None:
        ...

    @abc.abstractmethod
    async def name_exists(self, name: str, exclude_id: uuid.UUID | None = None) -> bool:
        ...


class UserRoleRepository(Repository[UserRole]):
    """Persist and retrieve role assignments."""

    @abc.abstractmethod
    async def get_by_user_id(self, user_id: uuid.UUID) -> list[UserRole]:
        """Assignments for the user, with each role loaded."""
        ...

    @abc.abstractmethod
    async def get_by_role_id(self, role_id: uuid.UUID) -> list[UserRole]:
        ...

    @abc.abstractmethod
    async def get_by_user_and_role(
        self, user_id: uuid.UUID, role_id: uuid.UUID
    ) -> UserRole | None:
        ...

    @abc.abstractmethod
    async def user_has_role(self, user_id: uuid.UUID, role_id: uuid.UUID) -> bool:
        ...

    @abc.abstractmethod
    async def user_has_role_named(self, user_id: uuid.UUID, role_name: str) -> bool:
        """True for an active assignment of an active role with this name."""
        ...


class RolePermissionRepository(Repository[RolePermission]):
    """Persist and retrieve permission grants.

    ``permission`` arguments accept a :class:`Permission` or its name;
    an unknown name never raises, it simply matches nothing.
    """

    @abc.abstractmethod
    async def get_by_role_id(self, role_id: uuid.UUID) -> list[RolePermission]:
        ...

    @abc.abstractmethod
    async def get_by_permission(self, permission: Permission | str) -> list[RolePermission]:
        ...

    @abc.abstractmethod
    async def get_by_role_and_permission(
        self, role_id: uuid.UUID, permission: Permission | str
    ) -> RolePermission | None:
        ...

    @abc.abstractmethod
    async def role_has_permission(
        self, role_id: uuid.UUID, permission: Permission | str
    ) -> bool:
        """True only for a granted permission."""
        ...


__all__ = ["RoleRepository", "UserRoleRepository", "RolePermissionRepository"]
