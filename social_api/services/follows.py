# services/follows.py
"""Follow graph operations."""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models
from ..exceptions import BadRequestError, DownstreamError
from . import notifications

logger = logging.getLogger(__name__)

FOLLOW = "follow"
UNFOLLOW = "unfollow"


def is_following(db: Session, follower_id: str, following_id: str) -> bool:
    return db.query(models.Follow.id).filter(
        models.Follow.follower_id == follower_id,
        models.Follow.following_id == following_id,
    ).first() is not None


def follow(db: Session, follower_id: str, following_id: str) -> dict:
    """Create the edge unless it exists, then notify the followed user."""
    if is_following(db, follower_id, following_id):
        return {"success": True, "message": "Already following", "is_following": True}

    try:
        db.add(models.Follow(follower_id=follower_id, following_id=following_id))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Insert error: {e}")
        raise DownstreamError("Failed to follow user", details=str(e))

    follower = db.query(models.Profile).filter(models.Profile.id == follower_id).first()
    notifications.notify(
        db,
        user_id=following_id,
        type="follow",
        title="New follower",
        body=f"{display_name(follower)} started following you!",
        data={"follower_id": follower_id},
    )

    logger.info(f"User {follower_id} successfully followed {following_id}")
    return {"success": True, "message": "Followed successfully", "is_following": True}


def unfollow(db: Session, follower_id: str, following_id: str) -> dict:
    """Remove the edge; a missing edge is not an error."""
    try:
        db.query(models.Follow).filter(
            models.Follow.follower_id == follower_id,
            models.Follow.following_id == following_id,
        ).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Delete error: {e}")
        raise DownstreamError("Failed to unfollow user", details=str(e))

    logger.info(f"User {follower_id} successfully unfollowed {following_id}")
    return {"success": True, "message": "Unfollowed successfully", "is_following": False}


def toggle_follow(db: Session, user_id: str, following_id: Optional[str], action: Optional[str]) -> dict:
    logger.info(f"User {user_id} attempting to {action} user {following_id}")

    if not following_id:
        raise BadRequestError("following_id is required")
    if user_id == following_id:
        raise BadRequestError("Cannot follow yourself")

    if action == FOLLOW:
        return follow(db, user_id, following_id)
    if action == UNFOLLOW:
        return unfollow(db, user_id, following_id)
    raise BadRequestError('Invalid action. Use "follow" or "unfollow"')


def display_name(profile: Optional[models.Profile]) -> str:
    if profile is None:
        return "Someone"
    return profile.full_name or profile.username or "Someone"
