# folio/app/db/base.py
"""
SQLAlchemy declarative base plus the column defaults shared by every model.

Records are keyed by opaque string ids and carry timezone-aware UTC
timestamps generated in Python, so ordering by created_at is stable even on
SQLite where server-side now() only has second resolution.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Usage:
        class Post(Base):
            __tablename__ = "posts"
            id = Column(String(32), primary_key=True, default=new_id)
            ...
    """
    pass


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; treat them as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


from folio.app.db.session import (  # noqa: E402
    engine,
    AsyncSessionLocal,
    get_db,
)

__all__ = [
    "Base",
    "new_id",
    "utcnow",
    "as_utc",
    "engine",
    "AsyncSessionLocal",
    "get_db",
]
