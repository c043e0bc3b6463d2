# database.py
"""Database configuration and session management."""

import os
import logging
from sqlalchemy import create_engine, NullPool, StaticPool
from sqlalchemy.orm import declarative_base, sessionmaker
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables from the .env file
load_dotenv()

# Get database URL from environment
DATABASE_URL = os.getenv('DATABASE_URL')
if not DATABASE_URL:
    raise RuntimeError(
        "DATABASE_URL environment variable is not set. "
        "Please set it in your .env file or environment."
    )


def make_engine(url: str):
    """Create the SQLAlchemy engine for the given URL.

    Lambda invocations must not hold pooled connections, so Postgres uses
    NullPool. SQLite (local runs and tests) shares one connection so an
    in-memory database survives across sessions.
    """
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, client_encoding='utf8', poolclass=NullPool)


logger.info("Connecting to database...")

engine = make_engine(DATABASE_URL)

# Create a configured "SessionLocal" class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()
