"""Skill category commands and queries."""

from .create import CreateSkillCategoryCommand, CreateSkillCategoryUseCase
from .delete import DeleteSkillCategoryCommand, DeleteSkillCategoryUseCase
from .get_all import GetAllSkillCategoriesQuery, GetAllSkillCategoriesUseCase
from .get_by_id import GetSkillCategoryByIdQuery, GetSkillCategoryByIdUseCase
from .result import SkillCategoryResult
from .update import UpdateSkillCategoryCommand, UpdateSkillCategoryUseCase

__all__ = [
    "SkillCategoryResult",
    "CreateSkillCategoryCommand",
    "CreateSkillCategoryUseCase",
    "UpdateSkillCategoryCommand",
    "UpdateSkillCategoryUseCase",
    "DeleteSkillCategoryCommand",
    "DeleteSkillCategoryUseCase",
    "GetAllSkillCategoriesQuery",
    "GetAllSkillCategoriesUseCase",
    "GetSkillCategoryByIdQuery",
    "GetSkillCategoryByIdUseCase",
]
