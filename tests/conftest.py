"""Pytest configuration and fixtures.

The app reads its configuration at import time, so the environment is set
before anything from ``social_api`` is imported. Every test gets a freshly
created in-memory SQLite schema.
"""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import pytest

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"

from fastapi.testclient import TestClient  # noqa: E402
from jose import jwt  # noqa: E402
from sqlalchemy import text  # noqa: E402

from social_api import models  # noqa: E402
from social_api.database import Base, SessionLocal, engine  # noqa: E402
from social_api.main import app  # noqa: E402

JWT_SECRET = os.environ["SUPABASE_JWT_SECRET"]


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def make_token(user_id: Optional[str], secret: str = JWT_SECRET, audience: str = "authenticated") -> str:
    claims = {
        "aud": audience,
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    if user_id is not None:
        claims["sub"] = user_id
    return jwt.encode(claims, secret, algorithm="HS256")


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest.fixture
def make_profile(db) -> Callable[..., models.Profile]:
    def _make(**fields) -> models.Profile:
        profile = models.Profile(**fields)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile
    return _make


@pytest.fixture
def make_admin(db, make_profile) -> Callable[..., models.Profile]:
    def _make(**fields) -> models.Profile:
        profile = make_profile(**fields)
        db.add(models.UserRole(user_id=profile.id, role="admin"))
        db.commit()
        return profile
    return _make


def fail_writes(db, table: str, operation: str) -> None:
    """Make every ``operation`` (INSERT/UPDATE/DELETE) on ``table`` abort."""
    db.execute(text(
        f"CREATE TRIGGER fail_{operation.lower()}_{table} BEFORE {operation} ON {table} "
        f"BEGIN SELECT RAISE(ABORT, '{table} {operation.lower()} blocked'); END"
    ))
    db.commit()


def drop_table(db, table: str) -> None:
    db.execute(text(f"DROP TABLE {table}"))
    db.commit()
