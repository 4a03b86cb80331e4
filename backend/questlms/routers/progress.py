# backend/questlms/routers/progress.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from questlms.db import get_db
from questlms.models.badge import Badge
from questlms.models.course import Course
from questlms.models.student_badge import StudentBadge
from questlms.models.student_progress import StudentProgress
from questlms.models.user import User
from questlms.schemas.progress import EnrollIn, StudentProgressOut, LeaderboardEntry

router = APIRouter(tags=["progress"])
logger = logging.getLogger(__name__)

DEFAULT_LEADERBOARD_SIZE = 10


# ----------------------------------------------------------------------
# Helpers shared with quizzes / assignments / missions
# ----------------------------------------------------------------------
def get_student(db: Session, student_id: int) -> User:
    """Load a user that has the student role, or 404."""
    student = db.scalar(
        select(User).where(User.id == student_id, User.role == "student")
    )
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


def find_progress(db: Session, student_id: int, course_id: int) -> StudentProgress | None:
    return db.scalar(
        select(StudentProgress).where(
            StudentProgress.student_id == student_id,
            StudentProgress.course_id == course_id,
        )
    )


def award_eligible_badges(db: Session, progress: StudentProgress) -> list[StudentBadge]:
    """Award every points-based badge the student now qualifies for and does not hold yet."""
    held = select(StudentBadge.badge_id).where(StudentBadge.student_id == progress.student_id)
    badges = db.scalars(
        select(Badge)
        .where(
            Badge.points_required.is_not(None),
            Badge.points_required <= progress.total_points,
            Badge.id.not_in(held),
        )
        .order_by(Badge.points_required, Badge.id)
    ).all()

    awarded = []
    for b in badges:
        sb = StudentBadge(student_id=progress.student_id, badge_id=b.id)
        db.add(sb)
        awarded.append(sb)
        logger.info("[progress] Student %s earned badge %s (%s)", progress.student_id, b.id, b.name)
    return awarded


def credit_progress(
    db: Session,
    student_id: int,
    course_id: int,
    points: int,
    missions: int = 0,
    create: bool = False,
) -> StudentProgress | None:
    """
    Add points (and completed missions) to a student's course progress.
    Without `create`, students that have no progress row are left untouched.
    Caller commits.
    """
    progress = find_progress(db, student_id, course_id)
    if progress is None:
        if not create:
            return None
        progress = StudentProgress(
            student_id=student_id,
            course_id=course_id,
            total_points=0,
            current_level=1,
            missions_completed=0,
        )
        db.add(progress)

    progress.credit(points, missions)
    db.flush()
    award_eligible_badges(db, progress)
    return progress


# ----------------------------------------------------------------------
# Progress
# ----------------------------------------------------------------------
@router.get("/progress", response_model=Optional[StudentProgressOut])
def get_student_progress(
    student_id: int = Query(...),
    course_id: int = Query(...),
    db: Session = Depends(get_db),
):
    """Progress of a student in a course; null when the student has none."""
    return find_progress(db, student_id, course_id)


@router.post("/progress", response_model=StudentProgressOut, status_code=201)
def enroll(payload: EnrollIn, db: Session = Depends(get_db)):
    if db.get(Course, payload.course_id) is None:
        raise HTTPException(status_code=404, detail="Course not found")
    user = db.get(User, payload.student_id)
    if user is None:
        raise HTTPException(status_code=404, detail="Student not found")
    if user.role != "student":
        raise HTTPException(status_code=400, detail="Only students can be enrolled")

    if find_progress(db, payload.student_id, payload.course_id) is not None:
        raise HTTPException(status_code=409, detail="Student already enrolled in course")

    progress = StudentProgress(student_id=payload.student_id, course_id=payload.course_id)
    db.add(progress)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Student already enrolled in course")
    db.refresh(progress)
    logger.info("[progress] Enrolled student %s in course %s", payload.student_id, payload.course_id)
    return progress


# ----------------------------------------------------------------------
# Leaderboard
# ----------------------------------------------------------------------
@router.get("/courses/{course_id}/leaderboard", response_model=List[LeaderboardEntry])
def get_leaderboard(
    course_id: int,
    limit: int = Query(DEFAULT_LEADERBOARD_SIZE, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """Students of a course ranked by points, then by completed missions."""
    rows = db.execute(
        select(
            StudentProgress.student_id,
            User.full_name,
            StudentProgress.total_points,
            StudentProgress.current_level,
            StudentProgress.missions_completed,
        )
        .join(User, User.id == StudentProgress.student_id)
        .where(StudentProgress.course_id == course_id)
        .order_by(
            StudentProgress.total_points.desc(),
            StudentProgress.missions_completed.desc(),
            StudentProgress.student_id,
        )
        .limit(limit)
    ).all()

    return [
        LeaderboardEntry(
            student_id=r.student_id,
            student_name=r.full_name,
            total_points=r.total_points,
            current_level=r.current_level,
            missions_completed=r.missions_completed,
            rank=i,
        )
        for i, r in enumerate(rows, start=1)
    ]
