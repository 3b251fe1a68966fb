"""GetSkillCategoryByIdUseCase — single category lookup."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from skillswap.domain.common.uow import UnitOfWork

from .result import SkillCategoryResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetSkillCategoryByIdQuery:
    category_id: uuid.UUID


class GetSkillCategoryByIdUseCase:
    async def execute(
        self, uow: UnitOfWork, query: GetSkillCategoryByIdQuery
    ) -> SkillCategoryResult | None:
        logger.info("Fetching skill category %s", query.category_id)
        async with uow:
            category = await uow.skill_categories.get_by_id(query.category_id)
            if category is None:
                logger.info("Skill category %s not found", query.category_id)
                return None
            return SkillCategoryResult.from_entity(category)
