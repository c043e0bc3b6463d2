# controllers/account_deletion.py
"""Account deletion endpoint: user requests plus admin actions."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..dependencies import get_db
from ..exceptions import BadRequestError, ForbiddenError
from ..responses import json_response
from ..schemas import social as schemas
from ..services import account_deletion as service
from ..services import admin_sessions

logger = logging.getLogger(__name__)

router = APIRouter()

USER_ACTIONS = ("request_deletion", "cancel_deletion", "get_status")
ADMIN_ACTIONS = ("get_all_pending", "admin_delete_now", "process_scheduled")


def _request_out(request):
    if request is None:
        return None
    return schemas.DeletionRequest.model_validate(request).model_dump()


@router.post("/manage-account-deletion", summary="Manage account deletion requests")
def manage_account_deletion(
    payload: schemas.AccountDeletionAction,
    db: Session = Depends(get_db),
    current_user: str = Depends(get_current_user)
):
    """Dispatch on ``action``.

    User actions apply to the caller's own account. Admin actions require
    the caller to hold the admin role.
    """
    action = payload.action
    logger.info(f"Account deletion action {action} by {current_user}")

    if action in USER_ACTIONS:
        # The dashboard passes a placeholder user_id for admin listings only
        if payload.user_id and payload.user_id != current_user:
            raise ForbiddenError("Cannot manage another user's account")

        if action == "request_deletion":
            request = service.request_deletion(db, current_user)
            return json_response({"success": True, "request": _request_out(request)})
        if action == "cancel_deletion":
            request = service.cancel_deletion(db, current_user)
            return json_response({"success": True, "request": _request_out(request)})
        return json_response({"request": _request_out(service.get_pending_request(db, current_user))})

    if action in ADMIN_ACTIONS:
        admin_sessions.require_admin(db, current_user)

        if action == "get_all_pending":
            return json_response({"requests": service.list_pending(db)})
        if action == "admin_delete_now":
            if not payload.user_id:
                raise BadRequestError("user_id is required")
            if payload.admin_id and payload.admin_id != current_user:
                raise ForbiddenError("admin_id does not match the authenticated user")
            service.delete_user_now(db, payload.user_id, admin_id=current_user)
            return json_response({"success": True, "message": "User account permanently deleted"})
        deleted = service.process_scheduled(db)
        return json_response({"success": True, "deleted_count": deleted})

    raise BadRequestError("Invalid action")
