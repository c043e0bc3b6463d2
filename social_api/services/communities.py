# services/communities.py
"""Community moderation for the admin dashboard."""

import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from .. import models
from ..exceptions import BadRequestError, DownstreamError, NotFoundError
from ..schemas.social import CommunityUpdates
from .views import community_status

logger = logging.getLogger(__name__)


def list_communities(db: Session) -> List[dict]:
    """All communities, newest first, with creator and member count."""
    member_counts = dict(
        db.query(models.CommunityMember.community_id, func.count(models.CommunityMember.id))
        .group_by(models.CommunityMember.community_id)
        .all()
    )
    communities = db.query(models.Community).options(
        joinedload(models.Community.creator)
    ).order_by(models.Community.created_at.desc()).all()

    return [community_row(c, member_counts.get(c.id, 0)) for c in communities]


def community_row(community: models.Community, member_count: int) -> dict:
    creator = community.creator
    return {
        "id": community.id,
        "name": community.name,
        "description": community.description,
        "cover_image_url": community.cover_image_url,
        "is_disabled": community.is_disabled,
        "disabled_at": community.disabled_at,
        "disabled_reason": community.disabled_reason,
        "approval_status": community.approval_status,
        "created_at": community.created_at,
        "created_by": community.created_by,
        "creator": {
            "full_name": creator.full_name,
            "username": creator.username,
        } if creator else None,
        "member_count": member_count,
        "status": community_status(community.is_disabled, community.approval_status),
    }


def update_community(db: Session, community_id: str, updates: CommunityUpdates) -> dict:
    """Apply a moderation update (disable/enable, approve/reject)."""
    if not community_id:
        raise BadRequestError("community_id is required")

    community = db.query(models.Community).filter(models.Community.id == community_id).first()
    if not community:
        raise NotFoundError("Community not found")

    changes = updates.model_dump(exclude_unset=True)
    if not changes:
        raise BadRequestError("No updates provided")

    if changes.get("approval_status") == "rejected" and not (changes.get("disabled_reason") or "").strip():
        raise BadRequestError("A reason is required to reject a community")

    final_status = changes.get("approval_status", community.approval_status)

    if "is_disabled" in changes:
        if changes["is_disabled"]:
            if not changes.get("disabled_at"):
                changes["disabled_at"] = datetime.now(timezone.utc)
        else:
            changes["disabled_at"] = None
            if final_status != "rejected":
                changes["disabled_reason"] = None
            elif not (changes.get("disabled_reason") or "").strip():
                # A rejected community keeps its rejection reason
                changes.pop("disabled_reason", None)

    final_reason = changes.get("disabled_reason", community.disabled_reason)
    if final_status == "rejected" and not (final_reason or "").strip():
        raise BadRequestError("A reason is required to reject a community")

    for field, value in changes.items():
        setattr(community, field, value)

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Community update error for {community_id}: {e}")
        raise DownstreamError("Failed to update community", details=str(e))

    logger.info(f"Community {community_id} updated: {sorted(changes)}")
    member_count = db.query(func.count(models.CommunityMember.id)).filter(
        models.CommunityMember.community_id == community_id
    ).scalar()
    return community_row(community, member_count or 0)
