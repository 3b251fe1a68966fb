"""Table definitions for every persisted entity.

Plain SQLAlchemy Core tables; ``orm.start_mappers()`` binds the domain
classes onto them.  Column names match the entity property names so a
``FilterSpec`` field name can be resolved directly against ``table.c``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Time,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
)

from skillswap.domain.access.models import RoleType
from skillswap.domain.users.models import SkillType, UserStatus, VerificationStatus

metadata = MetaData()


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetimes on every backend.

    SQLite drops tzinfo on storage; values read back are re-tagged as UTC
    so they compare cleanly with ``utc_now()``.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
            if dialect.name == "sqlite":
                value = value.replace(tzinfo=None)
        return value

    def process_result_value(self, value: datetime | None, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


def _str_enum(enum_cls: type[Enum], length: int = 32) -> SAEnum:
    """Store a ``str`` enum by value in a VARCHAR, not a native enum type."""
    return SAEnum(
        enum_cls,
        native_enum=False,
        create_constraint=False,
        length=length,
        values_callable=lambda members: [m.value for m in members],
    )


def _audit_columns() -> list[Column]:
    return [
        Column("id", Uuid, primary_key=True),
        Column("created_at", UTCDateTime, nullable=False),
        Column("updated_at", UTCDateTime, nullable=False),
    ]


# ── Skill catalogue ─────────────────────────────────────────────────────

skill_categories = Table(
    "skill_categories",
    metadata,
    *_audit_columns(),
    Column("name", String(50), nullable=False),
    Column("description", String(500), nullable=False, default=""),
    Column("slug", String(50), nullable=False),
    Column("color", String(7)),
    Column("icon", String(255)),
    Column("is_active", Boolean, nullable=False, default=True),
    Index("ix_skill_categories_name", "name", unique=True),
    Index("ix_skill_categories_slug", "slug", unique=True),
    Index("ix_skill_categories_is_active", "is_active"),
)

skills = Table(
    "skills",
    metadata,
    *_audit_columns(),
    Column("name", String(100), nullable=False),
    Column("slug", String(100), nullable=False),
    Column("description", String(500)),
    Column(
        "category_id",
        Uuid,
        ForeignKey("skill_categories.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column("is_active", Boolean, nullable=False, default=True),
    Index("ix_skills_slug", "slug", unique=True),
    Index("ix_skills_name", "name"),
    Index("ix_skills_category_id", "category_id"),
    Index("ix_skills_is_active", "is_active"),
)

# ── Users ───────────────────────────────────────────────────────────────

users = Table(
    "users",
    metadata,
    *_audit_columns(),
    Column("email", String(255), nullable=False),
    Column("username", String(50), nullable=False),
    Column("password_hash", String(255), nullable=False),
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False),
    Column("bio", String(1000)),
    Column("profile_image_url", String(500)),
    Column("timezone", String(50)),
    Column("preferred_language", String(10), nullable=False, default="en"),
    Column("status", _str_enum(UserStatus, 20), nullable=False),
    Column("verification_status", _str_enum(VerificationStatus, 20), nullable=False),
    Column("last_login_at", UTCDateTime),
    Index("ix_users_email", "email", unique=True),
    Index("ix_users_username", "username", unique=True),
    Index("ix_users_status", "status"),
)

user_skills = Table(
    "user_skills",
    metadata,
    *_audit_columns(),
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("skill_id", Uuid, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False),
    Column("skill_type", _str_enum(SkillType, 20), nullable=False),
    Column("proficiency_level", Integer, nullable=False),
    Column("years_of_experience", Integer),
    Column("description", String(1000)),
    Column("is_primary", Boolean, nullable=False, default=False),
    UniqueConstraint("user_id", "skill_id", "skill_type", name="uq_user_skills_user_skill_type"),
    Index("ix_user_skills_user_id", "user_id"),
    Index("ix_user_skills_skill_id", "skill_id"),
)

user_availability = Table(
    "user_availability",
    metadata,
    *_audit_columns(),
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("day_of_week", Integer, nullable=False),
    Column("start_time", Time, nullable=False),
    Column("end_time", Time, nullable=False),
    Column("timezone", String(50), nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
    Index("ix_user_availability_user_id", "user_id"),
    Index("ix_user_availability_day_active", "day_of_week", "is_active"),
)

user_preferences = Table(
    "user_preferences",
    metadata,
    *_audit_columns(),
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("email_notifications", Boolean, nullable=False, default=True),
    Column("push_notifications", Boolean, nullable=False, default=True),
    Column("session_reminders", Boolean, nullable=False, default=True),
    Column("marketing_emails", Boolean, nullable=False, default=False),
    Column("preferred_session_duration", Integer, nullable=False, default=60),
    Column("max_travel_distance", Integer),
    Column("preferred_meeting_platform", String(50), nullable=False, default="built_in"),
    Column("auto_accept_from_verified", Boolean, nullable=False, default=False),
    Index("uq_user_preferences_user_id", "user_id", unique=True),
)

# ── Access control ──────────────────────────────────────────────────────

roles = Table(
    "roles",
    metadata,
    *_audit_columns(),
    Column("role_type", _str_enum(RoleType, 20), nullable=False),
    Column("name", String(100), nullable=False),
    Column("description", String(500)),
    Column("is_active", Boolean, nullable=False, default=True),
    Index("ix_roles_role_type", "role_type", unique=True),
    Index("ix_roles_name", "name", unique=True),
)

user_roles = Table(
    "user_roles",
    metadata,
    *_audit_columns(),
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("role_id", Uuid, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False),
    Column("assigned_at", UTCDateTime, nullable=False),
    Column("assigned_by", String(255), nullable=False),
    Column("expires_at", UTCDateTime),
    Column("is_active", Boolean, nullable=False, default=True),
    UniqueConstraint("user_id", "role_id", name="uq_user_roles_user_role"),
)

role_permissions = Table(
    "role_permissions",
    metadata,
    *_audit_columns(),
    Column("role_id", Uuid, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False),
    Column("permission", Integer, nullable=False),
    Column("is_granted", Boolean, nullable=False, default=True),
    Column("granted_at", UTCDateTime, nullable=False),
    Column("granted_by", String(255), nullable=False),
    Column("conditions", String(1000)),
    UniqueConstraint("role_id", "permission", name="uq_role_permissions_role_permission"),
    Index("ix_role_permissions_permission", "permission"),
)
