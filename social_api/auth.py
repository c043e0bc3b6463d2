# social_api/auth.py
import os
import logging
from typing import Optional
from fastapi import Depends, Header
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from .exceptions import ApiError, AuthenticationError

logger = logging.getLogger(__name__)

# Security scheme; missing headers are reported by get_current_user itself
security = HTTPBearer(auto_error=False)


def decode_token(token: str) -> dict:
    """Verify a Supabase JWT and return its claims."""
    secret = os.getenv("SUPABASE_JWT_SECRET")

    if not secret:
        raise ApiError("JWT Secret not configured", status_code=500)

    try:
        # Supabase uses HS256 by default
        return jwt.decode(token, secret, algorithms=["HS256"], audience="authenticated")
    except JWTError as e:
        logger.error(f"Auth error: {e}")
        raise AuthenticationError("Invalid token")


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    authorization: Optional[str] = Header(None),
) -> str:
    """
    Verifies the bearer token and returns the user_id (sub).
    """
    if not authorization:
        raise AuthenticationError("No authorization header")
    if credentials is None:
        # Header present but not a Bearer credential
        raise AuthenticationError("Invalid token")

    payload = decode_token(credentials.credentials)
    user_id: Optional[str] = payload.get("sub")

    if not user_id:
        raise AuthenticationError("Invalid token")
    return user_id
