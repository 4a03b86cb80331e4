# backend/questlms/models/student_progress.py
from datetime import datetime, timezone
from sqlalchemy import Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from questlms.db import Base

POINTS_PER_LEVEL = 200


class StudentProgress(Base):
    __tablename__ = "student_progress"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    course_id: Mapped[int] = mapped_column(ForeignKey("courses.id"), nullable=False, index=True)
    total_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    missions_completed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    last_activity: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("student_id", "course_id", name="uq_student_progress_student_course"),
    )

    student = relationship("User")
    course = relationship("Course")

    @staticmethod
    def level_for_points(points: int) -> int:
        """Level 1 covers 0-199 points, level 2 covers 200-399, and so on."""
        return max(points, 0) // POINTS_PER_LEVEL + 1

    def credit(self, points: int, missions: int = 0) -> None:
        self.total_points += points
        self.missions_completed += missions
        self.current_level = self.level_for_points(self.total_points)
        self.last_activity = datetime.now(timezone.utc)
