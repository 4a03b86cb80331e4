# backend/questlms/routers/assignments.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from questlms.db import get_db
from questlms.models.assignment import Assignment
from questlms.models.assignment_submission import AssignmentSubmission
from questlms.models.mission import Mission
from questlms.routers.progress import credit_progress, get_student
from questlms.schemas.assignment import (
    AssignmentCreate,
    AssignmentOut,
    AssignmentSubmitIn,
    AssignmentSubmitRequest,
    AssignmentGradeIn,
    AssignmentSubmissionOut,
)

router = APIRouter(prefix="/assignments", tags=["assignments"])
logger = logging.getLogger(__name__)


def _naive(dt: datetime | None) -> datetime | None:
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def _submit(db: Session, assignment_id: int, payload: AssignmentSubmitIn) -> AssignmentSubmission:
    assignment = db.get(Assignment, assignment_id)
    if assignment is None:
        raise HTTPException(status_code=404, detail="Assignment not found")
    if not assignment.is_active:
        raise HTTPException(status_code=400, detail="Assignment is not active")

    get_student(db, payload.student_id)

    existing = db.scalar(
        select(AssignmentSubmission.id).where(
            AssignmentSubmission.assignment_id == assignment_id,
            AssignmentSubmission.student_id == payload.student_id,
        )
    )
    if existing is not None:
        logger.warning("[assignments] Student %s already submitted assignment %s",
                       payload.student_id, assignment_id)
        raise HTTPException(status_code=409, detail="Assignment already submitted")

    if not payload.content and not payload.file_url:
        raise HTTPException(status_code=400, detail="Either content or file_url must be provided")

    submission = AssignmentSubmission(
        assignment_id=assignment_id,
        student_id=payload.student_id,
        content=payload.content,
        file_url=payload.file_url,
    )
    db.add(submission)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Assignment already submitted")
    db.refresh(submission)
    logger.info("[assignments] Student %s submitted assignment %s", payload.student_id, assignment_id)
    return submission

# ----------------------------------------------------------------------
# Assignments
# ----------------------------------------------------------------------
@router.post("", response_model=AssignmentOut, status_code=201)
def create_assignment(payload: AssignmentCreate, db: Session = Depends(get_db)):
    if db.get(Mission, payload.mission_id) is None:
        raise HTTPException(status_code=404, detail="Mission not found")

    values = payload.model_dump()
    values["due_date"] = _naive(values["due_date"])
    assignment = Assignment(**values)
    db.add(assignment)
    db.commit()
    db.refresh(assignment)
    logger.info("[assignments] Created assignment id=%s for mission %s", assignment.id, assignment.mission_id)
    return assignment


@router.post("/submit", response_model=AssignmentSubmissionOut, status_code=201)
def submit_assignment(payload: AssignmentSubmitRequest, db: Session = Depends(get_db)):
    return _submit(db, payload.assignment_id, payload)


@router.post("/{assignment_id}/submissions", response_model=AssignmentSubmissionOut, status_code=201)
def submit_assignment_work(
    assignment_id: int, payload: AssignmentSubmitIn, db: Session = Depends(get_db)
):
    return _submit(db, assignment_id, payload)


@router.get("/{assignment_id}/submissions", response_model=List[AssignmentSubmissionOut])
def list_submissions(assignment_id: int, db: Session = Depends(get_db)):
    if db.get(Assignment, assignment_id) is None:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return db.scalars(
        select(AssignmentSubmission)
        .where(AssignmentSubmission.assignment_id == assignment_id)
        .order_by(AssignmentSubmission.submitted_at, AssignmentSubmission.id)
    ).all()


@router.post("/submissions/{submission_id}/grade", response_model=AssignmentSubmissionOut)
def grade_submission(submission_id: int, payload: AssignmentGradeIn, db: Session = Depends(get_db)):
    """Grade a submission once; the earned points go to the student's course progress."""
    submission = db.get(AssignmentSubmission, submission_id)
    if submission is None:
        raise HTTPException(status_code=404, detail="Submission not found")
    if submission.graded_at is not None:
        raise HTTPException(status_code=409, detail="Submission already graded")

    assignment = submission.assignment
    submission.score = payload.score
    submission.feedback = payload.feedback
    submission.points_earned = assignment.points_for_score(payload.score)
    submission.graded_at = datetime.now(timezone.utc)

    credit_progress(
        db,
        submission.student_id,
        assignment.mission.course_id,
        submission.points_earned,
    )
    db.commit()
    db.refresh(submission)
    logger.info("[assignments] Graded submission %s: score=%s points=%s",
                submission_id, submission.score, submission.points_earned)
    return submission
