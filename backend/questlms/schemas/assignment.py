# backend/questlms/schemas/assignment.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, conint


class AssignmentCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    mission_id: int
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    points_reward: conint(ge=0) = 0
    due_date: Optional[datetime] = None
    is_active: bool = True


class AssignmentOut(BaseModel):
    id: int
    mission_id: int
    title: str
    description: Optional[str] = None
    points_reward: int
    due_date: Optional[datetime] = None
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AssignmentSubmitIn(BaseModel):
    student_id: int
    content: Optional[str] = None
    file_url: Optional[str] = None


class AssignmentSubmitRequest(AssignmentSubmitIn):
    assignment_id: int


class AssignmentGradeIn(BaseModel):
    score: conint(ge=0, le=100)
    feedback: Optional[str] = None


class AssignmentSubmissionOut(BaseModel):
    id: int
    assignment_id: int
    student_id: int
    content: Optional[str] = None
    file_url: Optional[str] = None
    score: Optional[int] = None
    points_earned: Optional[int] = None
    feedback: Optional[str] = None
    submitted_at: datetime
    graded_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
