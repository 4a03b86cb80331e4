# backend/questlms/schemas/course.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class CourseCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    lecturer_id: int


class CourseOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    lecturer_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
