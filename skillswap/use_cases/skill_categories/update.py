"""UpdateSkillCategoryUseCase — rename or restyle an existing category."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from skillswap.domain.common.errors import ConflictError, EntityNotFoundError
from skillswap.domain.common.uow import UnitOfWork

from .create import DUPLICATE_NAME_MESSAGE
from .result import SkillCategoryResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateSkillCategoryCommand:
    category_id: uuid.UUID
    name: str
    description: str | None = None
    color: str | None = None
    icon: str | None = None


class UpdateSkillCategoryUseCase:
    async def execute(
        self, uow: UnitOfWork, cmd: UpdateSkillCategoryCommand
    ) -> SkillCategoryResult:
        logger.info("Updating skill category %s", cmd.category_id)
        async with uow:
            category = await uow.skill_categories.get_by_id(cmd.category_id)
            if category is None:
                raise EntityNotFoundError("SkillCategory", cmd.category_id)

            name = (cmd.name or "").strip()
            if name and await uow.skill_categories.name_exists(name, exclude_id=category.id):
                raise ConflictError(DUPLICATE_NAME_MESSAGE)

            category.update_category(cmd.name, cmd.description, cmd.color, cmd.icon)
            uow.skill_categories.update(category)
            await uow.save_changes()

            logger.info("Updated skill category %s", category.id)
            return SkillCategoryResult.from_entity(category)
