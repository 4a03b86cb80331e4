# backend/questlms/models/quiz_question.py
from sqlalchemy import String, Text, Integer, JSON, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from questlms.db import Base


class QuizQuestion(Base):
    __tablename__ = "quiz_questions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    quiz_id: Mapped[int] = mapped_column(
        ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False
    )
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    question_type: Mapped[str] = mapped_column(String(20), nullable=False)
    options: Mapped[list | None] = mapped_column(JSON, nullable=True)  # choices for multiple_choice / true_false
    correct_answer: Mapped[str] = mapped_column(Text, nullable=False)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "question_type IN ('multiple_choice', 'true_false', 'short_answer')",
            name="chk_valid_question_type",
        ),
        Index("ix_quiz_questions_quiz_order", "quiz_id", "order_index"),
    )

    quiz = relationship("Quiz", back_populates="questions")

    def is_correct(self, answer: str | None) -> bool:
        """Case-insensitive, whitespace-trimmed comparison against the stored answer."""
        if not answer:
            return False
        return answer.strip().lower() == self.correct_answer.strip().lower()
