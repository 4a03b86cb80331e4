# backend/questlms/routers/students.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from questlms.db import get_db
from questlms.models.badge import Badge
from questlms.models.student_badge import StudentBadge
from questlms.routers.progress import get_student
from questlms.schemas.badge import BadgeAwardIn, StudentBadgeOut

router = APIRouter(prefix="/students", tags=["students"])
logger = logging.getLogger(__name__)


@router.get("/{student_id}/badges", response_model=List[StudentBadgeOut])
def list_student_badges(student_id: int, db: Session = Depends(get_db)):
    """Badges earned by a student, oldest first."""
    return db.scalars(
        select(StudentBadge)
        .join(Badge, Badge.id == StudentBadge.badge_id)
        .where(StudentBadge.student_id == student_id)
        .order_by(StudentBadge.earned_at, StudentBadge.id)
    ).all()


@router.post("/{student_id}/badges", response_model=StudentBadgeOut, status_code=201)
def award_badge(student_id: int, payload: BadgeAwardIn, db: Session = Depends(get_db)):
    get_student(db, student_id)
    if db.get(Badge, payload.badge_id) is None:
        raise HTTPException(status_code=404, detail="Badge not found")

    held = db.scalar(
        select(StudentBadge.id).where(
            StudentBadge.student_id == student_id,
            StudentBadge.badge_id == payload.badge_id,
        )
    )
    if held is not None:
        raise HTTPException(status_code=409, detail="Badge already awarded")

    sb = StudentBadge(student_id=student_id, badge_id=payload.badge_id)
    db.add(sb)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Badge already awarded")
    db.refresh(sb)
    logger.info("[students] Awarded badge %s to student %s", payload.badge_id, student_id)
    return sb
