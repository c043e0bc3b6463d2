# services/account_deletion.py
"""Account deletion requests and permanent user removal."""

import os
import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from .. import models
from ..exceptions import BadRequestError, DownstreamError, NotFoundError
from .views import time_remaining

logger = logging.getLogger(__name__)


def notice_period() -> timedelta:
    return timedelta(days=int(os.getenv("DELETION_NOTICE_DAYS", "30")))


def get_pending_request(db: Session, user_id: str) -> Optional[models.AccountDeletionRequest]:
    return db.query(models.AccountDeletionRequest).filter(
        models.AccountDeletionRequest.user_id == user_id,
        models.AccountDeletionRequest.status == "pending",
    ).first()


def request_deletion(db: Session, user_id: str) -> models.AccountDeletionRequest:
    """Schedule the user's account for deletion after the notice period."""
    if get_pending_request(db, user_id):
        raise BadRequestError("A deletion request is already pending")

    now = datetime.now(timezone.utc)
    request = models.AccountDeletionRequest(
        user_id=user_id,
        requested_at=now,
        scheduled_deletion_at=now + notice_period(),
        status="pending",
    )
    try:
        db.add(request)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Deletion request error for user {user_id}: {e}")
        raise DownstreamError("Failed to request account deletion", details=str(e))

    db.refresh(request)
    logger.info(f"User {user_id} requested deletion, scheduled for {request.scheduled_deletion_at}")
    return request


def cancel_deletion(db: Session, user_id: str) -> models.AccountDeletionRequest:
    request = get_pending_request(db, user_id)
    if not request:
        raise NotFoundError("No pending deletion request")

    request.status = "cancelled"
    request.cancelled_at = datetime.now(timezone.utc)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Deletion cancel error for user {user_id}: {e}")
        raise DownstreamError("Failed to cancel account deletion", details=str(e))
    db.refresh(request)

    logger.info(f"User {user_id} cancelled deletion request {request.id}")
    return request


def list_pending(db: Session, now: Optional[datetime] = None) -> List[dict]:
    """Pending requests with the requester's profile, soonest deletion first."""
    now = now or datetime.now(timezone.utc)
    requests = db.query(models.AccountDeletionRequest).options(
        joinedload(models.AccountDeletionRequest.profiles)
    ).filter(
        models.AccountDeletionRequest.status == "pending"
    ).order_by(models.AccountDeletionRequest.scheduled_deletion_at.asc()).all()

    result = []
    for request in requests:
        profile = request.profiles
        result.append({
            "id": request.id,
            "user_id": request.user_id,
            "requested_at": request.requested_at,
            "scheduled_deletion_at": request.scheduled_deletion_at,
            "status": request.status,
            "time_remaining": time_remaining(request.scheduled_deletion_at, now),
            "profiles": {
                "id": profile.id,
                "full_name": profile.full_name,
                "username": profile.username,
                "avatar_url": profile.avatar_url,
                "email": profile.email,
            } if profile else None,
        })
    return result


def delete_user_now(db: Session, user_id: str, admin_id: Optional[str] = None) -> None:
    """Permanently remove a user and everything they own.

    The auth account itself lives in the managed auth service and is not
    touched here.
    """
    logger.info(f"Admin {admin_id} deleting user {user_id} immediately")

    post_ids = [row.id for row in db.query(models.Post.id).filter(models.Post.user_id == user_id)]
    try:
        if post_ids:
            db.query(models.Comment).filter(
                models.Comment.post_id.in_(post_ids)
            ).delete(synchronize_session=False)
        db.query(models.Comment).filter(models.Comment.user_id == user_id).delete(synchronize_session=False)
        db.query(models.Post).filter(models.Post.user_id == user_id).delete(synchronize_session=False)
        db.query(models.Follow).filter(
            or_(models.Follow.follower_id == user_id, models.Follow.following_id == user_id)
        ).delete(synchronize_session=False)
        db.query(models.Notification).filter(models.Notification.user_id == user_id).delete(synchronize_session=False)
        db.query(models.CommunityMember).filter(
            models.CommunityMember.user_id == user_id
        ).delete(synchronize_session=False)
        # Communities outlive their creator
        db.query(models.Community).filter(
            models.Community.created_by == user_id
        ).update({models.Community.created_by: None}, synchronize_session=False)
        db.query(models.UserRole).filter(models.UserRole.user_id == user_id).delete(synchronize_session=False)
        db.query(models.AdminSession).filter(models.AdminSession.admin_id == user_id).delete(synchronize_session=False)
        db.query(models.AccountDeletionRequest).filter(
            models.AccountDeletionRequest.user_id == user_id
        ).delete(synchronize_session=False)
        db.query(models.Profile).filter(models.Profile.id == user_id).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Account deletion error for user {user_id}: {e}")
        raise DownstreamError("Failed to delete account", details=str(e))

    logger.info(f"User {user_id} permanently deleted")


def process_scheduled(db: Session, now: Optional[datetime] = None) -> int:
    """Delete every user whose pending request has reached its scheduled time."""
    now = now or datetime.now(timezone.utc)
    due = db.query(models.AccountDeletionRequest.user_id).filter(
        models.AccountDeletionRequest.status == "pending",
        models.AccountDeletionRequest.scheduled_deletion_at <= now,
    ).all()

    for row in due:
        delete_user_now(db, row.user_id)
    return len(due)
