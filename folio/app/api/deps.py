# folio/app/api/deps.py
"""
Request-scoped authentication.

get_auth_context() reads the auth-token cookie and resolves it to a user
once per request; FastAPI caches the result so every dependency below
shares it.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Cookie, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from folio.app.core.config import settings
from folio.app.core.errors import PageRedirect
from folio.app.db.base import get_db
from folio.app.models.user import User, UserSession
from folio.app.services import sessions as session_service
from folio.app.services import users as user_service


@dataclass
class AuthContext:
    token: Optional[str] = None
    session: Optional[UserSession] = None
    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def stale(self) -> bool:
        """A cookie was sent but no longer maps to a live user; clear it."""
        return bool(self.token) and self.user is None


async def get_auth_context(
        db: AsyncSession = Depends(get_db),
        token: Optional[str] = Cookie(default=None, alias=settings.SESSION_COOKIE_NAME),
) -> AuthContext:
    if not token:
        return AuthContext()

    session = await session_service.get_session(db, token)
    if session is None:
        return AuthContext(token=token)

    user = await user_service.find_user_by_id(db, session.user_id)
    return AuthContext(token=token, session=session, user=user)


async def get_current_user(ctx: AuthContext = Depends(get_auth_context)) -> User:
    if not ctx.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return ctx.user


async def get_current_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


async def require_admin_page(ctx: AuthContext = Depends(get_auth_context)) -> User:
    """Page guard: redirects instead of answering with an error body."""
    if not ctx.is_authenticated:
        raise PageRedirect("/login", clear_cookie=ctx.stale)
    if not ctx.user.is_admin:
        raise PageRedirect("/unauthorized")
    return ctx.user
