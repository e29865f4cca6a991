# folio/app/db/session.py
"""
Engine and session factory.

SQLite (development and tests) runs without a pool; PostgreSQL gets a small
pre-pinged pool. Requests receive their own AsyncSession through get_db().
"""
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import AsyncAdaptedQueuePool, NullPool

from folio.app.core.config import settings

POOL_OPTIONS = {
    "poolclass": AsyncAdaptedQueuePool,
    "pool_size": 5,
    "max_overflow": 10,
    # hosted Postgres drops idle connections
    "pool_pre_ping": True,
    "pool_recycle": 300,
}


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    if url.lower().startswith("sqlite"):
        options = {"poolclass": NullPool, "connect_args": {"check_same_thread": False}}
    else:
        options = POOL_OPTIONS
    return create_async_engine(url, echo=echo, **options)


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Loaded attributes survive commit; services commit explicitly
    return async_sessionmaker(bind=bind, class_=AsyncSession, expire_on_commit=False, autoflush=False)


engine: AsyncEngine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
AsyncSessionLocal = build_sessionmaker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request, closed afterwards. Nothing is committed here."""
    async with AsyncSessionLocal() as session:
        yield session
