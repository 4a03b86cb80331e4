# backend/questlms/routers/courses.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from questlms.db import get_db
from questlms.models.course import Course
from questlms.models.mission import Mission
from questlms.models.user import User
from questlms.schemas.course import CourseCreate, CourseOut
from questlms.schemas.mission import MissionOut

router = APIRouter(prefix="/courses", tags=["courses"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[CourseOut])
def list_courses(db: Session = Depends(get_db)):
    return db.scalars(select(Course).order_by(Course.id)).all()


@router.post("", response_model=CourseOut, status_code=201)
def create_course(payload: CourseCreate, db: Session = Depends(get_db)):
    """Create a course owned by a lecturer (or admin)."""
    lecturer = db.get(User, payload.lecturer_id)
    if lecturer is None:
        logger.warning("[courses] Lecturer %s not found", payload.lecturer_id)
        raise HTTPException(status_code=404, detail="Lecturer not found")
    if not lecturer.can_teach:
        logger.warning("[courses] User %s has role %s; cannot create courses", lecturer.id, lecturer.role)
        raise HTTPException(status_code=400, detail="User must be a lecturer or admin to create courses")

    course = Course(
        name=payload.name,
        description=payload.description,
        lecturer_id=payload.lecturer_id,
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    logger.info("[courses] Created course id=%s by lecturer %s", course.id, lecturer.id)
    return course


@router.get("/{course_id}", response_model=CourseOut)
def get_course(course_id: int, db: Session = Depends(get_db)):
    course = db.get(Course, course_id)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    return course


@router.get("/{course_id}/missions", response_model=List[MissionOut])
def list_course_missions(course_id: int, db: Session = Depends(get_db)):
    """Missions of a course in meeting order (empty for unknown courses)."""
    return db.scalars(
        select(Mission)
        .where(Mission.course_id == course_id)
        .order_by(Mission.meeting_number, Mission.id)
    ).all()
