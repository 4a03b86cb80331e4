# backend/questlms/schemas/badge.py
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, conint


class BadgeCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    icon_url: Optional[str] = None
    points_required: Optional[conint(ge=0)] = None
    criteria: Optional[Any] = None


class BadgeOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    icon_url: Optional[str] = None
    points_required: Optional[int] = None
    criteria: Optional[Any] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BadgeAwardIn(BaseModel):
    badge_id: int


class StudentBadgeOut(BaseModel):
    id: int
    student_id: int
    badge_id: int
    earned_at: datetime

    model_config = ConfigDict(from_attributes=True)
