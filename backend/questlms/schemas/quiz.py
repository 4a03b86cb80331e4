# backend/questlms/schemas/quiz.py
from datetime import datetime
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, conint, field_validator

QuestionType = Literal["multiple_choice", "true_false", "short_answer"]


class QuizCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    mission_id: int
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    points_reward: conint(ge=0) = 0
    time_limit_minutes: Optional[conint(gt=0)] = None
    is_active: bool = True


class QuizOut(BaseModel):
    id: int
    mission_id: int
    title: str
    description: Optional[str] = None
    points_reward: int
    time_limit_minutes: Optional[int] = None
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class QuizQuestionCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    question_text: str = Field(..., min_length=1)
    question_type: QuestionType
    options: Optional[List[str]] = None
    correct_answer: str = Field(..., min_length=1)
    points: conint(ge=0) = 1
    order_index: int = 0

    @field_validator("options")
    @classmethod
    def _strip_options(cls, v):
        if v is None:
            return v
        return [o.strip() for o in v if o and o.strip()]


class QuizQuestionOut(BaseModel):
    id: int
    quiz_id: int
    question_text: str
    question_type: QuestionType
    options: Optional[List[str]] = None
    correct_answer: str
    points: int
    order_index: int

    model_config = ConfigDict(from_attributes=True)


class QuizQuestionPublic(BaseModel):
    """Question as shown to a student: no correct answer."""
    id: int
    question_text: str
    question_type: QuestionType
    options: Optional[List[str]] = None
    points: int
    order_index: int

    model_config = ConfigDict(from_attributes=True)


class QuizDetail(QuizOut):
    questions: List[QuizQuestionPublic] = []


class QuizSubmitIn(BaseModel):
    student_id: int
    answers: Dict[str, str]  # question id -> answer


class QuizSubmitRequest(QuizSubmitIn):
    quiz_id: int


class QuizSubmissionOut(BaseModel):
    id: int
    quiz_id: int
    student_id: int
    answers: Dict[str, str]
    score: int
    points_earned: int
    submitted_at: datetime

    model_config = ConfigDict(from_attributes=True)
