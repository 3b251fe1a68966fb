"""Roles, role assignments and per-role permission grants."""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from datetime import datetime
from enum import Enum, IntEnum

from ..common.entity import Entity, require_id, require_text, utc_now
from ..common.errors import ValidationError


class RoleType(str, Enum):
    SUPER_ADMIN = "super_admin"
    ADMINISTRATOR = "administrator"
    MODERATOR = "moderator"
    USER = "user"


class Permission(IntEnum):
    # User management
    VIEW_USERS = 1
    CREATE_USERS = 2
    UPDATE_USERS = 3
    DELETE_USERS = 4

    # Skill management
    VIEW_SKILLS = 5
    CREATE_SKILLS = 6
    UPDATE_SKILLS = 7
    DELETE_SKILLS = 8

    # Content moderation
    MODERATE_CONTENT = 9
    VIEW_REPORTS = 10
    RESOLVE_REPORTS = 11

    # System administration
    MANAGE_SYSTEM = 12
    VIEW_SYSTEM_LOGS = 13
    MANAGE_ROLES = 14

    # Swap management
    VIEW_SWAPS = 15
    CREATE_SWAPS = 16
    UPDATE_SWAPS = 17
    DELETE_SWAPS = 18

    # Profile management
    VIEW_PROFILES = 19
    UPDATE_OWN_PROFILE = 20
    UPDATE_ANY_PROFILE = 21

    @classmethod
    def parse(cls, value: str | int | Permission) -> Permission | None:
        """Resolve a member from its name or number; None if unknown.

        Names are matched ignoring case and underscores, so
        ``"ViewSkills"``, ``"view_skills"`` and ``"VIEW_SKILLS"`` all work.
        """
        if isinstance(value, Permission):
            return value
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                return None
        if not isinstance(value, str):
            return None
        key = value.strip().replace("_", "").lower()
        if key.isdigit():
            return cls.parse(int(key))
        for member in cls:
            if member.name.replace("_", "").lower() == key:
                return member
        return None


class Role(Entity):
    """A named bundle of permissions."""

    def __init__(
        self, role_type: RoleType, name: str, description: str | None = None
    ) -> None:
        super().__init__()
        self._role_type = RoleType(role_type)
        self._name = require_text(name, "Role name")
        self._description = description.strip() if description is not None else None
        self._is_active = True

    @property
    def role_type(self) -> RoleType:
        return RoleType(self._role_type)

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def role_permissions(self) -> tuple[RolePermission, ...]:
        """Grants loaded with the role (see ``get_with_permissions``)."""
        return tuple(getattr(self, "_role_permissions", ()))

    def update_role(self, name: str, description: str | None = None) -> None:
        self._name = require_text(name, "Role name")
        self._description = description.strip() if description is not None else None
        self.touch()

    def activate(self) -> None:
        self._is_active = True
        self.touch()

    def deactivate(self) -> None:
        self._is_active = False
        self.touch()

    def has_permission(self, permission: Permission) -> bool:
        return self._is_active and any(
            rp.permission == permission and rp.is_granted for rp in self.role_permissions
        )

    def granted_permissions(self) -> Iterator[Permission]:
        return (rp.permission for rp in self.role_permissions if rp.is_granted)


class UserRole(Entity):
    """Assignment of a role to a user, optionally time-limited."""

    def __init__(self, user_id: uuid.UUID, role_id: uuid.UUID, assigned_by: str) -> None:
        super().__init__()
        self._user_id = require_id(user_id, "User ID")
        self._role_id = require_id(role_id, "Role ID")
        self._assigned_by = require_text(assigned_by, "AssignedBy")
        self._assigned_at = self.created_at
        self._expires_at: datetime | None = None
        self._is_active = True

    @property
    def user_id(self) -> uuid.UUID:
        return self._user_id

    @property
    def role_id(self) -> uuid.UUID:
        return self._role_id

    @property
    def assigned_by(self) -> str:
        return self._assigned_by

    @property
    def assigned_at(self) -> datetime:
        return self._assigned_at

    @property
    def expires_at(self) -> datetime | None:
        return self._expires_at

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def role(self) -> Role | None:
        """The assigned Role; only available when eagerly loaded."""
        return getattr(self, "_role", None)

    def set_expiration(self, expires_at: datetime) -> None:
        if expires_at <= utc_now():
            raise ValidationError("Expiration date must be in the future")
        self._expires_at = expires_at
        self.touch()

    def remove_expiration(self) -> None:
        self._expires_at = None
        self.touch()

    def activate(self) -> None:
        self._is_active = True
        self.touch()

    def deactivate(self) -> None:
        self._is_active = False
        self.touch()

    def is_valid(self) -> bool:
        return self._is_active and (self._expires_at is None or self._expires_at > utc_now())


class RolePermission(Entity):
    """Grant (or explicit denial) of one permission to one role."""

    def __init__(
        self,
        role_id: uuid.UUID,
        permission: Permission,
        is_granted: bool,
        granted_by: str,
    ) -> None:
        super().__init__()
        self._role_id = require_id(role_id, "Role ID")
        self._permission = Permission(permission)
        self._is_granted = is_granted
        self._granted_by = require_text(granted_by, "GrantedBy")
        self._granted_at = self.created_at
        self._conditions: str | None = None

    @property
    def role_id(self) -> uuid.UUID:
        return self._role_id

    @property
    def permission(self) -> Permission:
        return Permission(self._permission)

    @property
    def is_granted(self) -> bool:
        return self._is_granted

    @property
    def granted_by(self) -> str:
        return self._granted_by

    @property
    def granted_at(self) -> datetime:
        return self._granted_at

    @property
    def conditions(self) -> str | None:
        return self._conditions

    def update_permission(self, is_granted: bool, updated_by: str) -> None:
        self._granted_by = require_text(updated_by, "UpdatedBy")
        self._is_granted = is_granted
        self._granted_at = utc_now()
        self.touch()

    def set_conditions(self, conditions: str | None) -> None:
        self._conditions = conditions.strip() if conditions is not None else None
        self.touch()

    def describe(self) -> str:
        action = "granted" if self._is_granted else "denied"
        suffix = f" with conditions: {self._conditions}" if self._conditions else ""
        return (
            f"Permission {self.permission.name} {action} on "
            f"{self._granted_at:%Y-%m-%d} by {self._granted_by}{suffix}"
        )


__all__ = ["RoleType", "Permission", "Role", "UserRole", "RolePermission"]
