# backend/questlms/routers/users.py
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from questlms.db import get_db
from questlms.models.user import User
from questlms.schemas.user import UserCreate, UserOut
from questlms.security import hash_password

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.post("", response_model=UserOut, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Register an account; the password is stored only as a bcrypt hash."""
    username = payload.username
    email = str(payload.email).lower()

    taken = db.scalar(
        select(User.id).where(or_(User.username == username, User.email == email))
    )
    if taken is not None:
        logger.warning("[users] Rejected duplicate username/email: %s / %s", username, email)
        raise HTTPException(status_code=409, detail="Username or email already exists")

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(payload.password),
        full_name=payload.full_name,
        role=payload.role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error("[users] IntegrityError: %s", e)
        raise HTTPException(status_code=409, detail="Username or email already exists")
    db.refresh(user)
    logger.info("[users] Created %s user id=%s", user.role, user.id)
    return user


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, db: Session = Depends(get_db)):
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
