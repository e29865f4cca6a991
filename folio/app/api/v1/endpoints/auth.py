# folio/app/api/v1/endpoints/auth.py
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from folio.app.api.deps import AuthContext, get_auth_context
from folio.app.db.base import get_db
from folio.app.schemas.base import decode
from folio.app.schemas.user import (
    DeleteAccountRequest,
    LoginRequest,
    LoginResponse,
    MeResponse,
    MessageResponse,
    SignupRequest,
    SignupResponse,
    UserPublic,
)
from folio.app.security import hashing
from folio.app.security.cookies import clear_session_cookie, set_session_cookie
from folio.app.services import sessions as session_service
from folio.app.services import users as user_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(payload: Optional[dict] = Body(default=None), db: AsyncSession = Depends(get_db)):
    data = decode(SignupRequest, payload or {})
    try:
        user = await user_service.create_user(db, data)
    except user_service.DuplicateUserError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info("Signed up %s", user.username)
    return {"message": "User created successfully", "user": user}


@router.post("/login", response_model=LoginResponse)
async def login(
        response: Response,
        payload: Optional[dict] = Body(default=None),
        db: AsyncSession = Depends(get_db),
):
    data = decode(LoginRequest, payload or {})

    user = await user_service.authenticate(db, data.email_or_username, data.password)
    if user is None:
        logger.warning("Failed login for %r", data.email_or_username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    session = await session_service.create_session(db, user.id)
    set_session_cookie(response, session.token)
    logger.info("Logged in %s", user.username)
    return {"message": "Login successful", "user": user}


@router.post("/logout", response_model=MessageResponse)
async def logout(
        response: Response,
        ctx: AuthContext = Depends(get_auth_context),
        db: AsyncSession = Depends(get_db),
):
    # Always succeeds, whether or not the cookie still maps to a session
    if ctx.token:
        await session_service.delete_session(db, ctx.token)
    clear_session_cookie(response)
    if ctx.user is not None:
        logger.info("Logged out %s", ctx.user.username)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=MeResponse)
async def me(response: Response, ctx: AuthContext = Depends(get_auth_context)):
    if ctx.stale:
        clear_session_cookie(response)
    return {"user": ctx.user}


@router.get("/verify", response_model=MeResponse)
async def verify(ctx: AuthContext = Depends(get_auth_context)):
    if not ctx.is_authenticated:
        response = JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": "Not authenticated"},
        )
        if ctx.stale:
            clear_session_cookie(response)
        return response
    return {"user": UserPublic.model_validate(ctx.user)}


@router.delete("/delete-account", response_model=MessageResponse)
async def delete_account(
        response: Response,
        payload: Optional[dict] = Body(default=None),
        ctx: AuthContext = Depends(get_auth_context),
        db: AsyncSession = Depends(get_db),
):
    if not ctx.token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    if ctx.session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session expired")
    if ctx.user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    data = decode(DeleteAccountRequest, payload or {})
    if not data.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Password is required")
    if not hashing.verify_password(data.password, ctx.user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect password")

    # Sessions first, then the account, then the cookie
    await session_service.delete_user_sessions(db, ctx.user.id)
    await user_service.delete_user(db, ctx.user)
    clear_session_cookie(response)
    return {"message": "Account deleted successfully"}
