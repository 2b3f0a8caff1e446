"""SQLAlchemy Declarative Base: shared base class for all ORM models.

Invariants:
    - All models inherit from Base
    - Timestamp columns default to utc_now (timezone-aware UTC)
    - Base is the single source of truth for table metadata

Design Decisions:
    - Separate file for Base: avoids circular imports between models
"""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def utc_now() -> datetime:
    """Column default for created_at / updated_at."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all community ORM models."""
    pass
