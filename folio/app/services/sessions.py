# folio/app/services/sessions.py
"""
Server-side login sessions.

A session is an opaque random token bound to a user id with an expiry equal
to the cookie max-age. Expiry is enforced on read: an expired record is
deleted the moment it is looked up. purge_expired_sessions() sweeps the rest
at startup.
"""
import logging
import secrets
from datetime import timedelta
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from folio.app.core.config import settings
from folio.app.db.base import as_utc, utcnow
from folio.app.models.user import UserSession

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


def generate_token() -> str:
    """43 URL-safe characters, 256 bits of randomness."""
    return secrets.token_urlsafe(TOKEN_BYTES)


def is_expired(session: UserSession) -> bool:
    return as_utc(session.expires_at) <= utcnow()


async def create_session(db: AsyncSession, user_id: str) -> UserSession:
    session = UserSession(
        token=generate_token(),
        user_id=user_id,
        expires_at=utcnow() + timedelta(days=settings.SESSION_TTL_DAYS),
    )
    db.add(session)
    await db.commit()
    logger.debug("Created session for user %s", user_id)
    return session


async def get_session(db: AsyncSession, token: str) -> Optional[UserSession]:
    """The live session for a token, or None if unknown or expired."""
    if not token:
        return None

    result = await db.execute(select(UserSession).where(UserSession.token == token))
    session = result.scalars().first()
    if session is None:
        return None

    if is_expired(session):
        await db.delete(session)
        await db.commit()
        logger.debug("Dropped expired session for user %s", session.user_id)
        return None

    return session


async def delete_session(db: AsyncSession, token: str) -> bool:
    """Idempotent. Returns whether a session was actually removed."""
    result = await db.execute(delete(UserSession).where(UserSession.token == token))
    await db.commit()
    return result.rowcount > 0


async def delete_user_sessions(db: AsyncSession, user_id: str) -> int:
    """Idempotent. Returns how many sessions were removed."""
    result = await db.execute(delete(UserSession).where(UserSession.user_id == user_id))
    await db.commit()
    logger.debug("Deleted %s session(s) for user %s", result.rowcount, user_id)
    return result.rowcount


async def purge_expired_sessions(db: AsyncSession) -> int:
    result = await db.execute(delete(UserSession).where(UserSession.expires_at <= utcnow()))
    await db.commit()
    if result.rowcount:
        logger.info("Purged %s expired session(s)", result.rowcount)
    return result.rowcount
