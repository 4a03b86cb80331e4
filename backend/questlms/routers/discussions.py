# backend/questlms/routers/discussions.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from questlms.db import get_db
from questlms.models.discussion_forum import DiscussionForum
from questlms.models.discussion_post import DiscussionPost
from questlms.models.mission import Mission
from questlms.models.user import User
from questlms.schemas.discussion import (
    DiscussionForumCreate,
    DiscussionForumOut,
    DiscussionPostIn,
    DiscussionPostCreate,
    DiscussionPostOut,
)

router = APIRouter(prefix="/forums", tags=["discussions"])
logger = logging.getLogger(__name__)


def _create_post(db: Session, forum_id: int, payload: DiscussionPostIn) -> DiscussionPost:
    if db.get(DiscussionForum, forum_id) is None:
        raise HTTPException(status_code=404, detail="Forum not found")
    if db.get(User, payload.user_id) is None:
        raise HTTPException(status_code=404, detail="User not found")

    if payload.parent_post_id is not None:
        parent = db.get(DiscussionPost, payload.parent_post_id)
        if parent is None:
            raise HTTPException(status_code=404, detail="Parent post not found")
        if parent.forum_id != forum_id:
            logger.warning("[discussions] Reply to post %s (forum %s) rejected in forum %s",
                           parent.id, parent.forum_id, forum_id)
            raise HTTPException(status_code=400, detail="Parent post must belong to the same forum")

    post = DiscussionPost(
        forum_id=forum_id,
        user_id=payload.user_id,
        content=payload.content,
        parent_post_id=payload.parent_post_id,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return post

# ----------------------------------------------------------------------
# Forums
# ----------------------------------------------------------------------
@router.post("", response_model=DiscussionForumOut, status_code=201)
def create_forum(payload: DiscussionForumCreate, db: Session = Depends(get_db)):
    if db.get(Mission, payload.mission_id) is None:
        raise HTTPException(status_code=404, detail="Mission not found")
    forum = DiscussionForum(
        mission_id=payload.mission_id,
        title=payload.title,
        description=payload.description,
    )
    db.add(forum)
    db.commit()
    db.refresh(forum)
    logger.info("[discussions] Created forum id=%s for mission %s", forum.id, forum.mission_id)
    return forum


@router.post("/posts", response_model=DiscussionPostOut, status_code=201)
def create_discussion_post(payload: DiscussionPostCreate, db: Session = Depends(get_db)):
    return _create_post(db, payload.forum_id, payload)


@router.get("/posts/{post_id}/replies", response_model=List[DiscussionPostOut])
def list_replies(post_id: int, db: Session = Depends(get_db)):
    """Direct replies to a post, oldest first."""
    if db.get(DiscussionPost, post_id) is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return db.scalars(
        select(DiscussionPost)
        .where(DiscussionPost.parent_post_id == post_id)
        .order_by(DiscussionPost.created_at, DiscussionPost.id)
    ).all()


@router.get("/{forum_id}", response_model=DiscussionForumOut)
def get_forum(forum_id: int, db: Session = Depends(get_db)):
    forum = db.get(DiscussionForum, forum_id)
    if not forum:
        raise HTTPException(status_code=404, detail="Forum not found")
    return forum


@router.post("/{forum_id}/posts", response_model=DiscussionPostOut, status_code=201)
def create_forum_post(forum_id: int, payload: DiscussionPostIn, db: Session = Depends(get_db)):
    return _create_post(db, forum_id, payload)


@router.get("/{forum_id}/posts", response_model=List[DiscussionPostOut])
def list_forum_posts(forum_id: int, db: Session = Depends(get_db)):
    """All posts of a forum, top-level and replies alike, in chronological order."""
    return db.scalars(
        select(DiscussionPost)
        .join(User, User.id == DiscussionPost.user_id)
        .where(DiscussionPost.forum_id == forum_id)
        .order_by(DiscussionPost.created_at, DiscussionPost.id)
    ).all()
