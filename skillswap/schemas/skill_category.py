"""
Pydantic schemas for skill category API requests and responses.
"""
import re
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

_NAME_RE = re.compile(r"^[a-zA-Z0-9\s\-&]+$")
_COLOR_RE = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")


class SkillCategoryBase(BaseModel):
    """Fields shared by create and update requests."""
    name: str = Field(..., max_length=50, description="Category name (e.g., 'Technology')")
    description: Optional[str] = Field(None, max_length=500, description="Short description")
    color: Optional[str] = Field(None, description="Hex colour, e.g. '#007ACC'")
    icon: Optional[str] = Field(None, description="Icon URL (http or https)")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Category name is required")
        if not _NAME_RE.match(v):
            raise ValueError(
                "Category name can only contain letters, numbers, spaces, hyphens, and ampersands"
            )
        return v

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v != "" and not _COLOR_RE.match(v):
            raise ValueError("Color must be a valid hex color code (e.g., #FF0000 or #F00)")
        return v or None

    @field_validator("icon")
    @classmethod
    def validate_icon(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v != "" and not v.lower().startswith(("http://", "https://")):
            raise ValueError("Icon must be a valid URL")
        return v or None


class SkillCategoryCreate(SkillCategoryBase):
    pass


class SkillCategoryUpdate(SkillCategoryBase):
    pass


class SkillCategoryResponse(BaseModel):
    """Schema for skill category response"""
    id: UUID
    name: str
    description: str
    slug: str
    color: Optional[str] = None
    icon: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
