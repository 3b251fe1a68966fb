"""
API endpoints for the skill category catalogue.
"""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ...domain.common.errors import (
    BusinessRuleError,
    ConflictError,
    EntityNotFoundError,
    ValidationError as DomainValidationError,
)
from ...domain.common.uow import UnitOfWork
from ...schemas.skill_category import (
    SkillCategoryCreate,
    SkillCategoryResponse,
    SkillCategoryUpdate,
)
from ...use_cases.skill_categories import (
    CreateSkillCategoryCommand,
    CreateSkillCategoryUseCase,
    DeleteSkillCategoryCommand,
    DeleteSkillCategoryUseCase,
    GetAllSkillCategoriesUseCase,
    GetSkillCategoryByIdQuery,
    GetSkillCategoryByIdUseCase,
    SkillCategoryResult,
    UpdateSkillCategoryCommand,
    UpdateSkillCategoryUseCase,
)
from ...wiring.bootstrap import (
    get_all_skill_categories_use_case,
    get_create_skill_category_use_case,
    get_delete_skill_category_use_case,
    get_skill_category_by_id_use_case,
    get_update_skill_category_use_case,
    get_uow,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _to_response(result: SkillCategoryResult) -> SkillCategoryResponse:
    return SkillCategoryResponse.model_validate(result)


@router.post("", response_model=SkillCategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_skill_category(
    request: SkillCategoryCreate,
    uow: UnitOfWork = Depends(get_uow),
    use_case: CreateSkillCategoryUseCase = Depends(get_create_skill_category_use_case),
):
    """Create a new skill category."""
    cmd = CreateSkillCategoryCommand(
        name=request.name,
        description=request.description,
        color=request.color,
        icon=request.icon,
    )
    try:
        result = await use_case.execute(uow, cmd)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except DomainValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _to_response(result)


@router.get("", response_model=List[SkillCategoryResponse])
async def list_skill_categories(
    uow: UnitOfWork = Depends(get_uow),
    use_case: GetAllSkillCategoriesUseCase = Depends(get_all_skill_categories_use_case),
):
    """List active skill categories ordered by name."""
    results = await use_case.execute(uow)
    return [_to_response(r) for r in results]


@router.get("/{category_id}", response_model=SkillCategoryResponse)
async def get_skill_category(
    category_id: UUID,
    uow: UnitOfWork = Depends(get_uow),
    use_case: GetSkillCategoryByIdUseCase = Depends(get_skill_category_by_id_use_case),
):
    """Get a single skill category."""
    result = await use_case.execute(uow, GetSkillCategoryByIdQuery(category_id=category_id))
    if result is None:
        raise HTTPException(status_code=404, detail=f"Skill category {category_id} not found")
    return _to_response(result)


@router.put("/{category_id}", response_model=SkillCategoryResponse)
async def update_skill_category(
    category_id: UUID,
    request: SkillCategoryUpdate,
    uow: UnitOfWork = Depends(get_uow),
    use_case: UpdateSkillCategoryUseCase = Depends(get_update_skill_category_use_case),
):
    """Rename or restyle a skill category."""
    cmd = UpdateSkillCategoryCommand(
        category_id=category_id,
        name=request.name,
        description=request.description,
        color=request.color,
        icon=request.icon,
    )
    try:
        result = await use_case.execute(uow, cmd)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except DomainValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _to_response(result)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_skill_category(
    category_id: UUID,
    uow: UnitOfWork = Depends(get_uow),
    use_case: DeleteSkillCategoryUseCase = Depends(get_delete_skill_category_use_case),
):
    """Soft-delete a skill category that has no skills."""
    try:
        await use_case.execute(uow, DeleteSkillCategoryCommand(category_id=category_id))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BusinessRuleError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return Response(status_code=status.HTTP_204_NO_CONTENT)
