"""SQLAlchemy repository implementations."""

from .base import SqlRepository
from .role_permission_repo import SqlRolePermissionRepository
from .role_repo import SqlRoleRepository
from .skill_category_repo import SqlSkillCategoryRepository
from .skill_repo import SqlSkillRepository
from .user_availability_repo import SqlUserAvailabilityRepository
from .user_preferences_repo import SqlUserPreferencesRepository
from .user_repo import SqlUserRepository
from .user_role_repo import SqlUserRoleRepository
from .user_skill_repo import SqlUserSkillRepository

__all__ = [
    "SqlRepository",
    "SqlSkillCategoryRepository",
    "SqlSkillRepository",
    "SqlUserRepository",
    "SqlUserSkillRepository",
    "SqlUserAvailabilityRepository",
    "SqlUserPreferencesRepository",
    "SqlRoleRepository",
    "SqlUserRoleRepository",
    "SqlRolePermissionRepository",
]
