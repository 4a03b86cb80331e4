# backend/questlms/models/mission.py
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from questlms.db import Base


class Mission(Base):
    __tablename__ = "missions"

    id = Column(Integer, primary_key=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    meeting_number = Column(Integer, nullable=False)
    points_reward = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    course = relationship("Course", back_populates="missions")
    materials = relationship("LearningMaterial", back_populates="mission")
    quizzes = relationship("Quiz", back_populates="mission")
    assignments = relationship("Assignment", back_populates="mission")
    forums = relationship("DiscussionForum", back_populates="mission")
