# backend/questlms/routers/badges.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from questlms.db import get_db
from questlms.models.badge import Badge
from questlms.schemas.badge import BadgeCreate, BadgeOut

router = APIRouter(prefix="/badges", tags=["badges"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[BadgeOut])
def list_badges(db: Session = Depends(get_db)):
    return db.scalars(select(Badge).order_by(Badge.id)).all()


@router.post("", response_model=BadgeOut, status_code=201)
def create_badge(payload: BadgeCreate, db: Session = Depends(get_db)):
    badge = Badge(**payload.model_dump())
    db.add(badge)
    db.commit()
    db.refresh(badge)
    logger.info("[badges] Created badge id=%s (%s)", badge.id, badge.name)
    return badge


@router.get("/{badge_id}", response_model=BadgeOut)
def get_badge(badge_id: int, db: Session = Depends(get_db)):
    badge = db.get(Badge, badge_id)
    if not badge:
        raise HTTPException(status_code=404, detail="Badge not found")
    return badge
