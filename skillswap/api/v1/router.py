"""
Main API router for v1 endpoints.
"""
from fastapi import APIRouter

from . import skill_categories

router = APIRouter()

router.include_router(
    skill_categories.router,
    prefix="/skill-categories",
    tags=["skill-categories"],
)
