# controllers/admin.py
"""Admin dashboard endpoints: session handling and community moderation."""

import logging

from fastapi import APIRouter, Depends
from pydantic import ValidationError
from sqlalchemy.orm import Session

from .. import models
from ..auth import get_current_user
from ..dependencies import get_db, get_admin_session
from ..exceptions import BadRequestError
from ..responses import json_response
from ..schemas import social as schemas
from ..services import admin_sessions, communities

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/admin-data", summary="Admin dashboard data and moderation")
def admin_data(
    payload: schemas.AdminDataRequest,
    db: Session = Depends(get_db),
    session: models.AdminSession = Depends(get_admin_session)
):
    """Serve the communities table and apply community updates."""
    logger.info(f"Admin data action {payload.action} by {session.admin_id}")

    if payload.action == "get_communities":
        return json_response({"communities": communities.list_communities(db)})

    if payload.action == "update_community":
        try:
            updates = schemas.CommunityUpdates.model_validate(payload.updates or {})
        except ValidationError as e:
            raise BadRequestError("Invalid updates", details=str(e))
        community = communities.update_community(db, payload.community_id, updates)
        return json_response({"success": True, "community": community})

    raise BadRequestError("Invalid action")


@router.post("/admin-auth/login", summary="Start an admin dashboard session")
def admin_login(
    db: Session = Depends(get_db),
    current_user: str = Depends(get_current_user)
):
    session = admin_sessions.create_session(db, current_user)
    return json_response({
        "session_token": session.session_token,
        "expires_at": session.expires_at,
    })


@router.post("/admin-auth/validate", summary="Check an admin session")
def admin_validate(session: models.AdminSession = Depends(get_admin_session)):
    return json_response({
        "valid": True,
        "admin_id": session.admin_id,
        "expires_at": session.expires_at,
    })


@router.post("/admin-auth/logout", summary="End an admin session")
def admin_logout(
    db: Session = Depends(get_db),
    session: models.AdminSession = Depends(get_admin_session)
):
    admin_sessions.end_session(db, session)
    return json_response({"success": True})
