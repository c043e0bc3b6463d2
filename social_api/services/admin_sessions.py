# services/admin_sessions.py
"""Admin dashboard sessions and role checks."""

import os
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models
from ..exceptions import AuthenticationError, DownstreamError, ForbiddenError

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


def session_lifetime() -> timedelta:
    return timedelta(hours=int(os.getenv("ADMIN_SESSION_HOURS", "24")))


def is_admin(db: Session, user_id: str) -> bool:
    return db.query(models.UserRole.id).filter(
        models.UserRole.user_id == user_id,
        models.UserRole.role == ADMIN_ROLE,
    ).first() is not None


def require_admin(db: Session, user_id: str) -> str:
    if not is_admin(db, user_id):
        logger.warning(f"User {user_id} attempted an admin action")
        raise ForbiddenError("Admin access required")
    return user_id


def create_session(db: Session, admin_id: str) -> models.AdminSession:
    """Issue a session token for an admin user."""
    require_admin(db, admin_id)

    session = models.AdminSession(
        admin_id=admin_id,
        session_token=secrets.token_urlsafe(48),  # 64 chars
        expires_at=datetime.now(timezone.utc) + session_lifetime(),
    )
    try:
        db.add(session)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Admin session insert error for {admin_id}: {e}")
        raise DownstreamError("Failed to create admin session", details=str(e))
    db.refresh(session)

    logger.info(f"Admin session created for {admin_id}")
    return session


def validate_session(db: Session, session_token: Optional[str]) -> models.AdminSession:
    """Return the live session for ``session_token`` or raise 401."""
    if not session_token:
        raise AuthenticationError("No admin session")

    session = db.query(models.AdminSession).filter(
        models.AdminSession.session_token == session_token,
        models.AdminSession.expires_at > datetime.now(timezone.utc),
    ).first()

    if not session or not is_admin(db, session.admin_id):
        raise AuthenticationError("Invalid or expired session")
    return session


def end_session(db: Session, session: models.AdminSession) -> None:
    admin_id = session.admin_id
    try:
        db.delete(session)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Admin session delete error for {admin_id}: {e}")
        raise DownstreamError("Failed to end admin session", details=str(e))
    logger.info(f"Admin session ended for {admin_id}")
