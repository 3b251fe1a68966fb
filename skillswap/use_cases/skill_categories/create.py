"""CreateSkillCategoryUseCase — add a new category to the catalogue.

Business rules:
  1. Category names are unique (checked before the insert)
  2. The slug is derived from the name
  3. A uniqueness violation from a concurrent writer surfaces as the
     same ConflictError, never as a raw storage failure

The use case depends ONLY on domain ports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from skillswap.domain.common.errors import ConflictError, SaveChangesError
from skillswap.domain.common.uow import UnitOfWork
from skillswap.domain.skills.models import SkillCategory, category_slug

from .result import SkillCategoryResult

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "A category with this name already exists."


# ── Command (input) ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class CreateSkillCategoryCommand:
    name: str
    description: str | None = None
    color: str | None = None
    icon: str | None = None


# ── Use Case ─────────────────────────────────────────────────────────────


class CreateSkillCategoryUseCase:
    """Validate, de-duplicate and persist a new SkillCategory."""

    async def execute(
        self, uow: UnitOfWork, cmd: CreateSkillCategoryCommand
    ) -> SkillCategoryResult:
        logger.info("Creating skill category %r", cmd.name)
        async with uow:
            category = SkillCategory(
                name=cmd.name,
                description=cmd.description,
                slug=category_slug(cmd.name),
                color=cmd.color,
                icon=cmd.icon,
            )

            if await uow.skill_categories.get_by_name(category.name) is not None:
                raise ConflictError(DUPLICATE_NAME_MESSAGE)
            if await uow.skill_categories.get_by_slug(category.slug) is not None:
                raise ConflictError("A category with a similar name already exists.")

            uow.skill_categories.add(category)
            try:
                await uow.save_changes()
            except SaveChangesError as exc:
                # Lost a race with a concurrent insert of the same name
                if await uow.skill_categories.name_exists(category.name):
                    raise ConflictError(DUPLICATE_NAME_MESSAGE) from exc
                raise

            logger.info("Created skill category %s (%s)", category.id, category.name)
            return SkillCategoryResult.from_entity(category)
