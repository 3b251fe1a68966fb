"""Read model returned by every skill category use case."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from skillswap.domain.skills.models import SkillCategory


@dataclass(frozen=True)
class SkillCategoryResult:
    id: uuid.UUID
    name: str
    description: str
    slug: str
    color: str | None
    icon: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, category: SkillCategory) -> SkillCategoryResult:
        return cls(
            id=category.id,
            name=category.name,
            description=category.description,
            slug=category.slug,
            color=category.color,
            icon=category.icon,
            is_active=category.is_active,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )
