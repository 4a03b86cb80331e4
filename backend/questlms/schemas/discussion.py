# backend/questlms/schemas/discussion.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class DiscussionForumCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    mission_id: int
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None


class DiscussionForumOut(BaseModel):
    id: int
    mission_id: int
    title: str
    description: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DiscussionPostIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    user_id: int
    content: str = Field(..., min_length=1)
    parent_post_id: Optional[int] = None


class DiscussionPostCreate(DiscussionPostIn):
    forum_id: int


class DiscussionPostOut(BaseModel):
    id: int
    forum_id: int
    user_id: int
    content: str
    parent_post_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
