# backend/questlms/routers/quizzes.py
from __future__ import annotations

import logging
from typing import Mapping, Sequence

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from questlms.db import get_db
from questlms.models.mission import Mission
from questlms.models.quiz import Quiz
from questlms.models.quiz_question import QuizQuestion
from questlms.models.quiz_submission import QuizSubmission
from questlms.routers.progress import credit_progress, get_student
from questlms.schemas.quiz import (
    QuizCreate,
    QuizOut,
    QuizDetail,
    QuizQuestionCreate,
    QuizQuestionOut,
    QuizSubmitIn,
    QuizSubmitRequest,
    QuizSubmissionOut,
)

router = APIRouter(prefix="/quizzes", tags=["quizzes"])
logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Grading
# ----------------------------------------------------------------------
def score_answers(
    questions: Sequence[QuizQuestion], answers: Mapping[str, str]
) -> tuple[int, int]:
    """
    Returns (score, points_earned).
    score is the percentage of correct questions rounded half up;
    points_earned sums the points of the correct ones.
    """
    if not questions:
        return 0, 0
    correct = 0
    points = 0
    for q in questions:
        if q.is_correct(answers.get(str(q.id))):
            correct += 1
            points += q.points
    total = len(questions)
    score = (200 * correct + total) // (2 * total)
    return score, points


def _submit(db: Session, quiz_id: int, payload: QuizSubmitIn) -> QuizSubmission:
    quiz = db.scalar(select(Quiz).where(Quiz.id == quiz_id, Quiz.is_active.is_(True)))
    if quiz is None:
        logger.warning("[quizzes] Submission to missing/inactive quiz %s", quiz_id)
        raise HTTPException(status_code=404, detail="Quiz not found or inactive")

    questions = db.scalars(
        select(QuizQuestion).where(QuizQuestion.quiz_id == quiz_id).order_by(QuizQuestion.order_index)
    ).all()
    if not questions:
        raise HTTPException(status_code=400, detail="No questions found for quiz")

    get_student(db, payload.student_id)

    score, points_earned = score_answers(questions, payload.answers)
    submission = QuizSubmission(
        quiz_id=quiz_id,
        student_id=payload.student_id,
        answers=dict(payload.answers),
        score=score,
        points_earned=points_earned,
    )
    db.add(submission)

    course_id = db.scalar(select(Mission.course_id).where(Mission.id == quiz.mission_id))
    progress = credit_progress(db, payload.student_id, course_id, points_earned)
    db.commit()
    db.refresh(submission)

    logger.info(
        "[quizzes] Student %s scored %s%% (+%s points) on quiz %s%s",
        payload.student_id, score, points_earned, quiz_id,
        "" if progress else " (not enrolled; progress unchanged)",
    )
    return submission

# ----------------------------------------------------------------------
# Quizzes
# ----------------------------------------------------------------------
@router.post("", response_model=QuizOut, status_code=201)
def create_quiz(payload: QuizCreate, db: Session = Depends(get_db)):
    if db.get(Mission, payload.mission_id) is None:
        raise HTTPException(status_code=404, detail="Mission not found")
    quiz = Quiz(**payload.model_dump())
    db.add(quiz)
    db.commit()
    db.refresh(quiz)
    logger.info("[quizzes] Created quiz id=%s for mission %s", quiz.id, quiz.mission_id)
    return quiz


@router.post("/submit", response_model=QuizSubmissionOut, status_code=201)
def submit_quiz(payload: QuizSubmitRequest, db: Session = Depends(get_db)):
    return _submit(db, payload.quiz_id, payload)


@router.get("/{quiz_id}", response_model=QuizDetail)
def get_quiz(quiz_id: int, db: Session = Depends(get_db)):
    """Quiz with its questions in order; correct answers are not included."""
    quiz = db.get(Quiz, quiz_id)
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return quiz


@router.post("/{quiz_id}/questions", response_model=QuizQuestionOut, status_code=201)
def add_question(quiz_id: int, payload: QuizQuestionCreate, db: Session = Depends(get_db)):
    if db.get(Quiz, quiz_id) is None:
        raise HTTPException(status_code=404, detail="Quiz not found")
    if payload.question_type == "multiple_choice" and not payload.options:
        raise HTTPException(status_code=400, detail="Multiple choice questions need options")

    question = QuizQuestion(quiz_id=quiz_id, **payload.model_dump())
    db.add(question)
    db.commit()
    db.refresh(question)
    return question


@router.post("/{quiz_id}/submissions", response_model=QuizSubmissionOut, status_code=201)
def submit_quiz_answers(quiz_id: int, payload: QuizSubmitIn, db: Session = Depends(get_db)):
    return _submit(db, quiz_id, payload)
