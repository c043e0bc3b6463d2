# exceptions.py
"""Errors raised by handlers and services.

Each error carries the HTTP status code and the message surfaced in the
``error`` field of the JSON envelope, plus optional ``details``.
"""

from typing import Any, Dict, Optional


class ApiError(Exception):
    """Base error rendered as ``{"error": ..., "details": ...}``."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class BadRequestError(ApiError):
    """Missing or invalid input."""
    status_code = 400


class AuthenticationError(ApiError):
    """Missing or invalid token / session."""
    status_code = 401


class ForbiddenError(ApiError):
    status_code = 403


class NotFoundError(ApiError):
    status_code = 404


class DownstreamError(ApiError):
    """A database operation failed."""
    status_code = 500
