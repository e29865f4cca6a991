# folio/app/api/v1/endpoints/admin_profile.py
"""
Admin side of the singleton profile.

POST uploads files (multipart), PUT applies one JSON update action, DELETE
removes one uploaded file. Each takes an "action" naming what to do.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from folio.app.api.forms import read_body
from folio.app.db.base import get_db
from folio.app.schemas.base import decode
from folio.app.schemas.profile import PROFILE_ACTIONS, ProfileResponse
from folio.app.services import profile as profile_service
from folio.app.services.media import IMAGE, RAW, discard, get_media_host, media_folder

logger = logging.getLogger(__name__)

router = APIRouter()

# action -> (media slot, form field, host folder, resource type, label)
UPLOADS = {
    "upload-profile-image": ("profile-image", "image", "profile", IMAGE, "Profile image"),
    "upload-cover-image": ("cover-image", "image", "profile", IMAGE, "Cover image"),
    "upload-cv": ("cv", "cv", "cv", RAW, "CV"),
}

# action -> (media slot, label)
DELETES = {
    "delete-profile-image": ("profile-image", "Profile image"),
    "delete-cover-image": ("cover-image", "Cover image"),
    "delete-cv": ("cv", "CV"),
}


def require_action(action: Optional[str], known) -> str:
    if not action:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Action parameter required")
    if action not in known:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid action")
    return action


@router.get("", response_model=ProfileResponse)
async def read_profile(db: AsyncSession = Depends(get_db)):
    profile = await profile_service.get_or_create_profile(db)
    return {"profile": profile}


@router.post("", response_model=ProfileResponse)
async def upload(
        request: Request,
        db: AsyncSession = Depends(get_db),
        media=Depends(get_media_host),
):
    body = await read_body(request)
    action = body.fields.get("action") or request.query_params.get("action")
    action = require_action(action, UPLOADS)

    slot, field, folder, resource_type, label = UPLOADS[action]
    file = body.file(field)
    if file is None:
        detail = "CV file required" if slot == "cv" else "Image file required"
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

    profile = await profile_service.get_or_create_profile(db)
    previous_public_id = profile_service.media_public_id(profile, slot)

    result = await media.upload(
        await file.read(),
        media_folder(folder),
        resource_type=resource_type,
        filename=file.filename,
    )
    profile = await profile_service.set_media(db, profile, slot, result)
    await discard(media, previous_public_id)

    logger.info("%s uploaded", label)
    return {"profile": profile, "message": f"{label} uploaded successfully"}


@router.put("", response_model=ProfileResponse)
async def update(request: Request, db: AsyncSession = Depends(get_db)):
    body = await read_body(request)
    if body.is_multipart:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Use POST for file uploads")

    action = require_action(body.fields.get("action"), PROFILE_ACTIONS)
    data = decode(PROFILE_ACTIONS[action], body.fields)

    profile = await profile_service.get_or_create_profile(db)
    profile = await profile_service.update_profile(db, profile, data)
    return {"profile": profile, "message": "Profile updated successfully"}


@router.delete("", response_model=ProfileResponse)
async def delete_file(
        action: Optional[str] = None,
        db: AsyncSession = Depends(get_db),
        media=Depends(get_media_host),
):
    action = require_action(action, DELETES)
    slot, label = DELETES[action]

    profile = await profile_service.get_or_create_profile(db)
    await discard(media, profile_service.media_public_id(profile, slot))
    profile = await profile_service.clear_media(db, profile, slot)
    return {"profile": profile, "message": f"{label} deleted successfully"}
