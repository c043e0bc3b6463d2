# services/comments.py
"""Comment creation."""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from .. import models
from ..exceptions import BadRequestError, DownstreamError
from . import notifications
from .follows import display_name

logger = logging.getLogger(__name__)


def create_comment(db: Session, user_id: Optional[str], post_id: Optional[str],
                   content: Optional[str]) -> models.Comment:
    """Insert a comment and return it with the author's profile loaded."""
    logger.info(f"Creating comment - user: {user_id} post: {post_id}")

    content = (content or "").strip()
    if not user_id or not post_id or not content:
        raise BadRequestError("User ID, Post ID, and content are required")

    comment = models.Comment(user_id=user_id, post_id=post_id, content=content)
    try:
        db.add(comment)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Comment creation error: {e}")
        raise DownstreamError("Failed to create comment")

    # Re-select with the profile projection joined in
    comment = db.query(models.Comment).options(
        joinedload(models.Comment.profiles)
    ).filter(models.Comment.id == comment.id).one()

    notify_post_author(db, comment)

    logger.info(f"Comment created successfully: {comment.id}")
    return comment


def notify_post_author(db: Session, comment: models.Comment) -> None:
    post = db.query(models.Post).filter(models.Post.id == comment.post_id).first()
    if post is None or post.user_id == comment.user_id:
        return

    notifications.notify(
        db,
        user_id=post.user_id,
        type="comment",
        title="New comment",
        body=f"{display_name(comment.profiles)} commented on your post",
        data={"post_id": post.id, "comment_id": comment.id, "commenter_id": comment.user_id},
    )
