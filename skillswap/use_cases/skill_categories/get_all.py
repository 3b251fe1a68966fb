"""GetAllSkillCategoriesUseCase — list the active catalogue."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from skillswap.domain.common.uow import UnitOfWork

from .result import SkillCategoryResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetAllSkillCategoriesQuery:
    pass


class GetAllSkillCategoriesUseCase:
    """Active categories ordered by name."""

    async def execute(
        self, uow: UnitOfWork, query: GetAllSkillCategoriesQuery | None = None
    ) -> list[SkillCategoryResult]:
        logger.info("Listing active skill categories")
        async with uow:
            categories = await uow.skill_categories.get_active()
            logger.info("Found %d active skill categories", len(categories))
            return [SkillCategoryResult.from_entity(c) for c in categories]
