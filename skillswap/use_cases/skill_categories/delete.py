"""DeleteSkillCategoryUseCase — soft-delete an empty category.

A category that still has skills filed under it (active or not) cannot
be deleted.  Deletion only deactivates the row so historical references
stay valid.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from skillswap.domain.common.errors import BusinessRuleError, EntityNotFoundError
from skillswap.domain.common.query import FilterSpec
from skillswap.domain.common.uow import UnitOfWork

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteSkillCategoryCommand:
    category_id: uuid.UUID


class DeleteSkillCategoryUseCase:
    async def execute(self, uow: UnitOfWork, cmd: DeleteSkillCategoryCommand) -> None:
        logger.info("Deleting skill category %s", cmd.category_id)
        async with uow:
            category = await uow.skill_categories.get_by_id(cmd.category_id)
            if category is None:
                raise EntityNotFoundError("SkillCategory", cmd.category_id)

            in_category = FilterSpec.where(category_id=category.id)
            if await uow.skills.exists(in_category):
                raise BusinessRuleError(
                    "Cannot delete category that contains skills. "
                    "Move or delete associated skills first."
                )

            category.deactivate()
            uow.skill_categories.update(category)
            await uow.save_changes()

            logger.info("Deactivated skill category %s", category.id)
