# social_api/dependencies.py
"""Centralized dependencies for FastAPI application."""

from fastapi import Header, Depends
from sqlalchemy.orm import Session

from .database import SessionLocal
from . import models
from .services import admin_sessions


def get_db():
    """Database session dependency.

    Yields a database session and ensures it's closed after use.
    Usage: db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_admin_session(
    x_session_token: str = Header(None),
    db: Session = Depends(get_db)
) -> models.AdminSession:
    """
    Resolves the admin dashboard session from the X-Session-Token header.
    """
    return admin_sessions.validate_session(db, x_session_token)
