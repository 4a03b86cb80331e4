# backend/questlms/schemas/progress.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict


class EnrollIn(BaseModel):
    student_id: int
    course_id: int


class StudentProgressOut(BaseModel):
    id: int
    student_id: int
    course_id: int
    total_points: int
    current_level: int
    missions_completed: int
    last_activity: datetime
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LeaderboardEntry(BaseModel):
    student_id: int
    student_name: str
    total_points: int
    current_level: int
    missions_completed: int
    rank: int
