from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Literal, Optional


# Request bodies. Identifiers are optional here so the handlers can answer
# a missing field with their own 400 message.

class ToggleFollowRequest(BaseModel):
    following_id: Optional[str] = None
    action: Optional[str] = None


class CreateCommentRequest(BaseModel):
    user_id: Optional[str] = None
    post_id: Optional[str] = None
    content: Optional[str] = None


class AccountDeletionAction(BaseModel):
    action: Optional[str] = None
    user_id: Optional[str] = None
    admin_id: Optional[str] = None


class CommunityUpdates(BaseModel):
    """Fields an admin may change on a community."""
    is_disabled: Optional[bool] = None
    disabled_at: Optional[datetime] = None
    disabled_reason: Optional[str] = None
    approval_status: Optional[Literal["pending", "approved", "rejected"]] = None

    @field_validator('is_disabled', 'approval_status')
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError('Value may not be null')
        return v

    class Config:
        extra = "forbid"


class AdminDataRequest(BaseModel):
    action: Optional[str] = None
    community_id: Optional[str] = None
    updates: Optional[dict] = None


# Response projections

class CommentAuthor(BaseModel):
    id: str
    full_name: Optional[str] = None
    username: Optional[str] = None
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True


class Comment(BaseModel):
    id: str
    user_id: str
    post_id: str
    content: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    profiles: Optional[CommentAuthor] = None

    class Config:
        from_attributes = True


class DeletionRequest(BaseModel):
    id: str
    user_id: str
    requested_at: datetime
    scheduled_deletion_at: datetime
    status: str
    cancelled_at: Optional[datetime] = None

    class Config:
        from_attributes = True
