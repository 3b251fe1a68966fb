"""Skill catalogue entities: categories and the skills filed under them."""

from __future__ import annotations

import re
import uuid

from ..common.entity import Entity, require_id
from ..common.errors import ValidationError

_CATEGORY_SLUG_RE = re.compile(r"^[a-z0-9\-]+$")
_SLUG_STRIP_RE = re.compile(r"[^a-z0-9\-]")
_MULTI_HYPHEN_RE = re.compile(r"-{2,}")

CATEGORY_NAME_MAX = 50
CATEGORY_SLUG_MAX = 50
SKILL_NAME_MAX = 100


def skill_slug(name: str) -> str:
    """URL slug for a skill name: ``"C#"`` -> ``"csharp"``, ``"Node.js"`` -> ``"node-js"``."""
    if not name or not name.strip():
        return ""
    slug = (
        name.lower()
        .replace(" ", "-")
        .replace("_", "-")
        .replace(".", "-")
        .replace("#", "sharp")
        .replace("+", "plus")
        .replace("&", "and")
    )
    slug = _SLUG_STRIP_RE.sub("", slug)
    slug = _MULTI_HYPHEN_RE.sub("-", slug)
    return slug.strip("-")


def category_slug(name: str) -> str:
    """URL slug for a category name: ``"Arts & Crafts"`` -> ``"arts-crafts"``."""
    slug = re.sub(r"[\s\-]+", "-", (name or "").strip().lower())
    slug = _SLUG_STRIP_RE.sub("", slug)
    slug = _MULTI_HYPHEN_RE.sub("-", slug)
    return slug.strip("-")


def _strip_or_none(value: str | None) -> str | None:
    return value.strip() if value is not None else None


class SkillCategory(Entity):
    """Top-level grouping for skills (Technology, Music, ...)."""

    def __init__(
        self,
        name: str,
        description: str | None,
        slug: str,
        color: str | None = None,
        icon: str | None = None,
    ) -> None:
        super().__init__()
        self._name = self._validate_name(name)
        self._description = (description or "").strip()
        self._slug = self._validate_slug(slug)
        self._color = _strip_or_none(color)
        self._icon = _strip_or_none(icon)
        self._is_active = True

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def slug(self) -> str:
        return self._slug

    @property
    def color(self) -> str | None:
        return self._color

    @property
    def icon(self) -> str | None:
        return self._icon

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def skills(self) -> tuple[Skill, ...]:
        """Skills loaded alongside the category (see ``get_with_skills``)."""
        return tuple(getattr(self, "_skills", ()))

    def update_category(
        self,
        name: str,
        description: str | None,
        color: str | None = None,
        icon: str | None = None,
    ) -> None:
        self._name = self._validate_name(name)
        self._description = (description or "").strip()
        self._color = _strip_or_none(color)
        self._icon = _strip_or_none(icon)
        self.touch()

    def update_slug(self, slug: str) -> None:
        self._slug = self._validate_slug(slug)
        self.touch()

    def activate(self) -> None:
        self._is_active = True
        self.touch()

    def deactivate(self) -> None:
        self._is_active = False
        self.touch()

    @staticmethod
    def _validate_name(name: str) -> str:
        if not name or not name.strip():
            raise ValidationError("Category name cannot be empty")
        if len(name) > CATEGORY_NAME_MAX:
            raise ValidationError(
                f"Category name cannot exceed {CATEGORY_NAME_MAX} characters"
            )
        return name.strip()

    @staticmethod
    def _validate_slug(slug: str) -> str:
        if not slug or not slug.strip():
            raise ValidationError("Category slug cannot be empty")
        if len(slug) > CATEGORY_SLUG_MAX:
            raise ValidationError(
                f"Category slug cannot exceed {CATEGORY_SLUG_MAX} characters"
            )
        if not _CATEGORY_SLUG_RE.match(slug):
            raise ValidationError(
                "Category slug must contain only lowercase letters, numbers, and hyphens"
            )
        return slug.strip()


class Skill(Entity):
    """A teachable/learnable skill; the slug is always derived from the name."""

    def __init__(
        self,
        name: str,
        description: str | None,
        category_id: uuid.UUID,
    ) -> None:
        super().__init__()
        self._name = self._validate_name(name)
        self._slug = skill_slug(name)
        self._description = _strip_or_none(description)
        self._category_id = require_id(category_id, "Category ID")
        self._is_active = True

    @property
    def name(self) -> str:
        return self._name

    @property
    def slug(self) -> str:
        return self._slug

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def category_id(self) -> uuid.UUID:
        return self._category_id

    @property
    def is_active(self) -> bool:
        return self._is_active

    def update_name(self, name: str, description: str | None = None) -> None:
        self._name = self._validate_name(name)
        self._slug = skill_slug(name)
        self._description = _strip_or_none(description)
        self.touch()

    def change_category(self, category_id: uuid.UUID) -> None:
        self._category_id = require_id(category_id, "Category ID")
        self.touch()

    def activate(self) -> None:
        self._is_active = True
        self.touch()

    def deactivate(self) -> None:
        self._is_active = False
        self.touch()

    @staticmethod
    def _validate_name(name: str) -> str:
        if not name or not name.strip():
            raise ValidationError("Skill name cannot be empty")
        if len(name) > SKILL_NAME_MAX:
            raise ValidationError(f"Skill name cannot exceed {SKILL_NAME_MAX} characters")
        return name.strip()


__all__ = ["SkillCategory", "Skill", "skill_slug", "category_slug"]
