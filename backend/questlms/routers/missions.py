# backend/questlms/routers/missions.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from questlms.db import get_db
from questlms.models.assignment import Assignment
from questlms.models.course import Course
from questlms.models.discussion_forum import DiscussionForum
from questlms.models.learning_material import LearningMaterial
from questlms.models.mission import Mission
from questlms.models.mission_completion import MissionCompletion
from questlms.models.quiz import Quiz
from questlms.routers.progress import credit_progress, get_student
from questlms.schemas.assignment import AssignmentOut
from questlms.schemas.discussion import DiscussionForumOut
from questlms.schemas.learning_material import LearningMaterialCreate, LearningMaterialOut
from questlms.schemas.mission import (
    MissionCreate,
    MissionOut,
    MissionCompleteIn,
    MissionCompletionOut,
)
from questlms.schemas.quiz import QuizOut

router = APIRouter(prefix="/missions", tags=["missions"])
logger = logging.getLogger(__name__)


def _get_mission(db: Session, mission_id: int) -> Mission:
    mission = db.get(Mission, mission_id)
    if not mission:
        raise HTTPException(status_code=404, detail="Mission not found")
    return mission

# ----------------------------------------------------------------------
# Missions
# ----------------------------------------------------------------------
@router.post("", response_model=MissionOut, status_code=201)
def create_mission(payload: MissionCreate, db: Session = Depends(get_db)):
    if db.get(Course, payload.course_id) is None:
        raise HTTPException(status_code=404, detail="Course not found")

    mission = Mission(
        course_id=payload.course_id,
        title=payload.title,
        description=payload.description,
        meeting_number=payload.meeting_number,
        points_reward=payload.points_reward,
        is_active=payload.is_active,
    )
    db.add(mission)
    db.commit()
    db.refresh(mission)
    logger.info("[missions] Created mission id=%s (meeting %s) in course %s",
                mission.id, mission.meeting_number, mission.course_id)
    return mission


@router.get("/{mission_id}", response_model=MissionOut)
def get_mission(mission_id: int, db: Session = Depends(get_db)):
    return _get_mission(db, mission_id)


@router.post("/{mission_id}/complete", response_model=MissionCompletionOut, status_code=201)
def complete_mission(mission_id: int, payload: MissionCompleteIn, db: Session = Depends(get_db)):
    """
    Mark a mission done for a student: the mission's reward and one completed
    mission go to the student's progress in the mission's course.
    """
    mission = _get_mission(db, mission_id)
    if not mission.is_active:
        raise HTTPException(status_code=400, detail="Mission is not active")
    get_student(db, payload.student_id)

    done = db.scalar(
        select(MissionCompletion.id).where(
            MissionCompletion.mission_id == mission_id,
            MissionCompletion.student_id == payload.student_id,
        )
    )
    if done is not None:
        raise HTTPException(status_code=409, detail="Mission already completed")

    completion = MissionCompletion(
        student_id=payload.student_id,
        mission_id=mission_id,
        points_awarded=mission.points_reward,
    )
    db.add(completion)
    try:
        credit_progress(
            db,
            payload.student_id,
            mission.course_id,
            mission.points_reward,
            missions=1,
            create=True,
        )
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error("[missions] IntegrityError completing mission %s: %s", mission_id, e)
        raise HTTPException(status_code=409, detail="Mission already completed")
    db.refresh(completion)
    logger.info("[missions] Student %s completed mission %s (+%s points)",
                payload.student_id, mission_id, mission.points_reward)
    return completion

# ----------------------------------------------------------------------
# Learning materials
# ----------------------------------------------------------------------
@router.get("/{mission_id}/materials", response_model=List[LearningMaterialOut])
def list_learning_materials(mission_id: int, db: Session = Depends(get_db)):
    return db.scalars(
        select(LearningMaterial)
        .where(LearningMaterial.mission_id == mission_id)
        .order_by(LearningMaterial.id)
    ).all()


@router.post("/{mission_id}/materials", response_model=LearningMaterialOut, status_code=201)
def create_learning_material(
    mission_id: int, payload: LearningMaterialCreate, db: Session = Depends(get_db)
):
    _get_mission(db, mission_id)
    material = LearningMaterial(mission_id=mission_id, **payload.model_dump())
    db.add(material)
    db.commit()
    db.refresh(material)
    return material

# ----------------------------------------------------------------------
# Mission content listings
# ----------------------------------------------------------------------
@router.get("/{mission_id}/quizzes", response_model=List[QuizOut])
def list_mission_quizzes(mission_id: int, db: Session = Depends(get_db)):
    return db.scalars(select(Quiz).where(Quiz.mission_id == mission_id).order_by(Quiz.id)).all()


@router.get("/{mission_id}/assignments", response_model=List[AssignmentOut])
def list_mission_assignments(mission_id: int, db: Session = Depends(get_db)):
    return db.scalars(
        select(Assignment).where(Assignment.mission_id == mission_id).order_by(Assignment.id)
    ).all()


@router.get("/{mission_id}/forums", response_model=List[DiscussionForumOut])
def list_mission_forums(mission_id: int, db: Session = Depends(get_db)):
    return db.scalars(
        select(DiscussionForum)
        .where(DiscussionForum.mission_id == mission_id)
        .order_by(DiscussionForum.id)
    ).all()
