from .social import (
    Profile,
    UserRole,
    Community,
    CommunityMember,
    Post,
    Comment,
    Follow,
    Notification,
    AccountDeletionRequest,
    AdminSession,
)
