# folio/app/security/cookies.py
"""
The auth-token cookie.

HttpOnly so scripts never see the token, SameSite=Strict so it is not sent
on cross-site requests, Secure only in production (local dev runs on http).
"""
from fastapi import Response

from folio.app.core.config import settings


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.session_max_age,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
