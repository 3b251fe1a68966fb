"""Imperative mapping of the domain entities onto ``tables``.

The domain classes stay free of SQLAlchemy imports; this module teaches
the ORM where their underscore-prefixed attributes live.  Every column
``foo`` maps to attribute ``_foo`` (``column_prefix="_"``), which the
entity exposes through a read-only ``foo`` property.

Relationships are ``lazy="raise"``: an async session cannot lazy
load, so repository methods that need related rows eager-load them
explicitly with ``selectinload``.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import registry, relationship

from skillswap.domain.access.models import Role, RolePermission, UserRole
from skillswap.domain.skills.models import Skill, SkillCategory
from skillswap.domain.users.models import (
    User,
    UserAvailability,
    UserPreferences,
    UserSkill,
)
from skillswap.infra.db import tables

logger = logging.getLogger(__name__)

mapper_registry = registry(metadata=tables.metadata)

_mapped = False


def start_mappers() -> None:
    """Map every entity class.  Safe to call more than once."""
    global _mapped
    if _mapped:
        return

    map_ = mapper_registry.map_imperatively

    # ── Skill catalogue ──────────────────────────────────────────────────
    map_(
        Skill,
        tables.skills,
        column_prefix="_",
        properties={
            # Many-to-one links order INSERTs parent-first within one flush.
            "_category": relationship(SkillCategory, lazy="raise"),
        },
    )
    map_(
        SkillCategory,
        tables.skill_categories,
        column_prefix="_",
        properties={
            "_skills": relationship(
                Skill,
                primaryjoin=tables.skill_categories.c.id == tables.skills.c.category_id,
                order_by=tables.skills.c.name,
                lazy="raise",
                viewonly=True,
            ),
        },
    )

    # ── Users ────────────────────────────────────────────────────────────
    map_(
        UserSkill,
        tables.user_skills,
        column_prefix="_",
        properties={
            "_skill": relationship(Skill, lazy="raise"),
            "_user": relationship(User, back_populates="_user_skills", lazy="raise"),
        },
    )
    map_(
        UserAvailability,
        tables.user_availability,
        column_prefix="_",
        properties={
            "_user": relationship(User, back_populates="_availability", lazy="raise"),
        },
    )
    map_(UserPreferences, tables.user_preferences, column_prefix="_")
    map_(
        User,
        tables.users,
        column_prefix="_",
        properties={
            "_user_skills": relationship(
                UserSkill,
                back_populates="_user",
                cascade="all, delete-orphan",
                passive_deletes=True,
                lazy="raise",
            ),
            "_availability": relationship(
                UserAvailability,
                back_populates="_user",
                order_by=(
                    tables.user_availability.c.day_of_week,
                    tables.user_availability.c.start_time,
                ),
                cascade="all, delete-orphan",
                passive_deletes=True,
                lazy="raise",
            ),
            "_preferences": relationship(
                UserPreferences,
                uselist=False,
                cascade="all, delete-orphan",
                passive_deletes=True,
                lazy="raise",
            ),
        },
    )

    # ── Access control ───────────────────────────────────────────────────
    map_(
        RolePermission,
        tables.role_permissions,
        column_prefix="_",
        properties={
            "_role": relationship(Role, lazy="raise"),
        },
    )
    map_(
        Role,
        tables.roles,
        column_prefix="_",
        properties={
            "_role_permissions": relationship(
                RolePermission,
                order_by=tables.role_permissions.c.permission,
                lazy="raise",
                viewonly=True,
            ),
        },
    )
    map_(
        UserRole,
        tables.user_roles,
        column_prefix="_",
        properties={
            "_role": relationship(Role, lazy="raise"),
            "_user": relationship(User, lazy="raise"),
        },
    )

    mapper_registry.configure()
    _mapped = True
    logger.debug("Mapped %d entity classes", len(mapper_registry.mappers))
