# controllers/follows.py
"""Follow/unfollow endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..dependencies import get_db
from ..responses import json_response
from ..schemas import social as schemas
from ..services import follows as service

router = APIRouter()


@router.post("/toggle-follow", summary="Follow or unfollow a user")
def toggle_follow(
    payload: schemas.ToggleFollowRequest,
    db: Session = Depends(get_db),
    current_user: str = Depends(get_current_user)
):
    """Follow or unfollow ``following_id`` as the authenticated user."""
    result = service.toggle_follow(db, current_user, payload.following_id, payload.action)
    return json_response(result)
