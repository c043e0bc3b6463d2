# models/social.py
"""SQLAlchemy models mirroring the social app's tables."""

import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Column, String, Text, Boolean, DateTime, ForeignKey, JSON,
    UniqueConstraint, CheckConstraint,
)
from sqlalchemy.orm import relationship
from ..database import Base


def utc_now():
    """Return current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


def new_id():
    return str(uuid.uuid4())


class Profile(Base):
    """Public profile of an authenticated user (id matches the auth user id)."""
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=new_id)
    full_name = Column(String, nullable=True)
    username = Column(String, nullable=True, unique=True)
    avatar_url = Column(String, nullable=True)
    email = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)


class UserRole(Base):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),)

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    role = Column(String, nullable=False, default="user")  # admin, moderator, user
    created_at = Column(DateTime(timezone=True), default=utc_now)


class Community(Base):
    """User-created community, moderated from the admin dashboard."""
    __tablename__ = "communities"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    cover_image_url = Column(String, nullable=True)
    is_disabled = Column(Boolean, default=False)
    disabled_at = Column(DateTime(timezone=True), nullable=True)
    disabled_reason = Column(Text, nullable=True)
    approval_status = Column(String, default="pending")  # pending, approved, rejected
    created_by = Column(String(36), ForeignKey("profiles.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)

    creator = relationship("Profile")
    members = relationship("CommunityMember", back_populates="community", cascade="all, delete-orphan")


class CommunityMember(Base):
    __tablename__ = "community_members"
    __table_args__ = (UniqueConstraint("community_id", "user_id", name="uq_community_members"),)

    id = Column(String(36), primary_key=True, default=new_id)
    community_id = Column(String(36), ForeignKey("communities.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    role = Column(String, default="member")  # owner, moderator, member
    joined_at = Column(DateTime(timezone=True), default=utc_now)

    community = relationship("Community", back_populates="members")


class Post(Base):
    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    community_id = Column(String(36), ForeignKey("communities.id"), nullable=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)


class Comment(Base):
    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    post_id = Column(String(36), ForeignKey("posts.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    # Exposed as "profiles" to match the joined projection clients read
    profiles = relationship("Profile")


class Follow(Base):
    """Directed follow edge: follower_id follows following_id."""
    __tablename__ = "follows"
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_follows_edge"),
        CheckConstraint("follower_id <> following_id", name="ck_follows_not_self"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    follower_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    following_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)  # Recipient
    type = Column(String, nullable=False)  # follow, comment, ...
    title = Column(String, nullable=False)
    body = Column(Text, nullable=True)
    data = Column(JSON, nullable=True)
    is_read = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)


class AccountDeletionRequest(Base):
    """User request to delete their account after a notice period."""
    __tablename__ = "account_deletion_requests"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    requested_at = Column(DateTime(timezone=True), default=utc_now)
    scheduled_deletion_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(String, default="pending")  # pending, cancelled; deleted with the user once processed
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    profiles = relationship("Profile")


class AdminSession(Base):
    """Dashboard session issued to an admin; sent back as x-session-token."""
    __tablename__ = "admin_sessions"

    id = Column(String(36), primary_key=True, default=new_id)
    admin_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    session_token = Column(String(64), unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    expires_at = Column(DateTime(timezone=True), nullable=False)
