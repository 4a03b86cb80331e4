# backend/questlms/schemas/learning_material.py
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

MaterialType = Literal["lecture", "reading", "video", "simulation"]


class LearningMaterialCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    content: Optional[str] = None
    material_type: MaterialType
    file_url: Optional[str] = None


class LearningMaterialOut(BaseModel):
    id: int
    mission_id: int
    title: str
    content: Optional[str] = None
    material_type: MaterialType
    file_url: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
