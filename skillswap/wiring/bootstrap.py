"""Dependency injection bootstrap — the single place that binds ports to adapters.

Every factory function here can be used as a FastAPI ``Depends()`` target.
Routers never import concrete implementations directly; they depend on
the abstractions returned by these factories.

Example usage in a router::

    from skillswap.wiring.bootstrap import get_uow, get_create_skill_category_use_case

    @router.post("/skill-categories")
    async def create_category(
        request: SkillCategoryCreate,
        uow: UnitOfWork = Depends(get_uow),
        use_case: CreateSkillCategoryUseCase = Depends(get_create_skill_category_use_case),
    ):
        result = await use_case.execute(uow, command)
"""

from __future__ import annotations

from typing import AsyncIterator

from skillswap.database import SessionLocal
from skillswap.domain.common.uow import UnitOfWork
from skillswap.infra.db.uow import SqlUnitOfWork
from skillswap.use_cases.skill_categories import (
    CreateSkillCategoryUseCase,
    DeleteSkillCategoryUseCase,
    GetAllSkillCategoriesUseCase,
    GetSkillCategoryByIdUseCase,
    UpdateSkillCategoryUseCase,
)


# ── Unit of Work ─────────────────────────────────────────────────────────


def create_uow() -> SqlUnitOfWork:
    """A fresh unit of work for callers outside a request (startup, scripts)."""
    return SqlUnitOfWork(SessionLocal)


async def get_uow() -> AsyncIterator[UnitOfWork]:
    """Yield a request-scoped SqlUnitOfWork and always close it.

    Designed for FastAPI Depends()::

        uow: UnitOfWork = Depends(get_uow)
    """
    uow = create_uow()
    try:
        yield uow
    finally:
        await uow.close()


# ── Use Cases ────────────────────────────────────────────────────────────


def get_create_skill_category_use_case() -> CreateSkillCategoryUseCase:
    return CreateSkillCategoryUseCase()


def get_update_skill_category_use_case() -> UpdateSkillCategoryUseCase:
    return UpdateSkillCategoryUseCase()


def get_delete_skill_category_use_case() -> DeleteSkillCategoryUseCase:
    return DeleteSkillCategoryUseCase()


def get_all_skill_categories_use_case() -> GetAllSkillCategoriesUseCase:
    return GetAllSkillCategoriesUseCase()


def get_skill_category_by_id_use_case() -> GetSkillCategoryByIdUseCase:
    return GetSkillCategoryByIdUseCase()
