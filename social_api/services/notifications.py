# services/notifications.py
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models

logger = logging.getLogger(__name__)


def notify(db: Session, user_id: str, type: str, title: str, body: str,
           data: Optional[dict] = None) -> Optional[models.Notification]:
    """Insert a notification row.

    Notifications are a side effect of another mutation, so a failure is
    logged and the caller's result stands.
    """
    notification = models.Notification(
        user_id=user_id, type=type, title=title, body=body, data=data or {}
    )
    try:
        db.add(notification)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Notification insert error for user {user_id}: {e}")
        return None
    return notification
