"""Repository ports for the skill catalogue."""

from __future__ import annotations

import abc
import uuid

from ..common.repository import Repository
from .models import Skill, SkillCategory


class SkillCategoryRepository(Repository[SkillCategory]):
    """Persist and retrieve skill categories."""

    @abc.abstractmethod
    async def get_by_name(self, name: str) -> SkillCategory | None:
        ...

    @abc.abstractmethod
    async def get_by_slug(self, slug: str) -> SkillCategory | None:
        ...

    @abc.abstractmethod
    async def get_active(self) -> list[SkillCategory]:
        """Active categories ordered by name."""
        ...

    @abc.abstractmethod
    async def get_with_skills(self, category_id: uuid.UUID) -> SkillCategory | None:
        """Category with its *active* skills eagerly loaded."""
        ...

    @abc.abstractmethod
    async def get_ordered(self) -> list[SkillCategory]:
        """All categories ordered by name."""
        ...

    @abc.abstractmethod
    async def name_exists(
        self, name: str, exclude_id: uuid.UUID | None = None
    ) -> bool:
        """True if another category (not ``exclude_id``) already uses ``name``."""
        ...


class SkillRepository(Repository[Skill]):
    """Persist and retrieve skills."""

    @abc.abstractmethod
    async def get_by_name(self, name: str) -> Skill | None:
        ...

    @abc.abstractmethod
    async def get_by_slug(self, slug: str) -> Skill | None:
        ...

    @abc.abstractmethod
    async def get_by_category(self, category_id: uuid.UUID) -> list[Skill]:
        """Every skill in the category, active or not."""
        ...

    @abc.abstractmethod
    async def get_active_skills(self) -> list[Skill]:
        ...

    @abc.abstractmethod
    async def search(self, term: str) -> list[Skill]:
        """Case-insensitive match on name or description among active skills.

        A blank term returns an empty list.
        """
        ...

    @abc.abstractmethod
    async def name_exists_in_category(
        self,
        name: str,
        category_id: uuid.UUID,
        exclude_id: uuid.UUID | None = None,
    ) -> bool:
        ...


__all__ = ["SkillCategoryRepository", "SkillRepository"]
