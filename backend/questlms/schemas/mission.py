# backend/questlms/schemas/mission.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, conint


class MissionBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    meeting_number: conint(gt=0)
    points_reward: conint(ge=0) = 0
    is_active: bool = True


class MissionCreate(MissionBase):
    course_id: int


class MissionOut(BaseModel):
    id: int
    course_id: int
    title: str
    description: Optional[str] = None
    meeting_number: int
    points_reward: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MissionCompleteIn(BaseModel):
    student_id: int


class MissionCompletionOut(BaseModel):
    id: int
    student_id: int
    mission_id: int
    points_awarded: int
    completed_at: datetime

    model_config = ConfigDict(from_attributes=True)
