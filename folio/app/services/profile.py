# folio/app/services/profile.py
"""
The single portfolio profile.

get_or_create_profile() is what the admin side uses; the public side only
ever sees the profile once it has been published.
"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from folio.app.models.profile import Profile, default_experience, default_social_links
from folio.app.schemas.profile import (
    ProfileAction,
    TogglePublish,
    UpdateBasic,
    UpdateCertifications,
    UpdateEducation,
    UpdateExperience,
    UpdateSkills,
    UpdateSocial,
    UpdateTechnologies,
)
from folio.app.services.media import MediaUpload

logger = logging.getLogger(__name__)

# Profile attribute pairs (url column, public id column) per uploadable slot
MEDIA_SLOTS = {
    "profile-image": ("profile_image", "profile_image_public_id"),
    "cover-image": ("cover_image", "cover_image_public_id"),
    "cv": ("cv_url", "cv_public_id"),
}


async def get_profile(db: AsyncSession) -> Optional[Profile]:
    result = await db.execute(select(Profile).order_by(Profile.created_at).limit(1))
    return result.scalars().first()


async def get_published_profile(db: AsyncSession) -> Optional[Profile]:
    profile = await get_profile(db)
    if profile is None or not profile.is_published:
        return None
    return profile


async def get_or_create_profile(db: AsyncSession) -> Profile:
    profile = await get_profile(db)
    if profile is not None:
        return profile

    profile = Profile()
    db.add(profile)
    await db.commit()
    await db.refresh(profile)
    logger.info("Created empty profile %s", profile.id)
    return profile


def apply_action(profile: Profile, action: ProfileAction) -> None:
    """Apply one decoded PUT /admin/profile action to the record in place."""
    if isinstance(action, UpdateBasic):
        for key, value in action.model_dump(exclude={"action"}, exclude_unset=True).items():
            if value is not None:
                setattr(profile, key, value)

    elif isinstance(action, UpdateSocial):
        links = dict(default_social_links(), **(profile.social_links or {}))
        links.update(action.social_links)
        profile.social_links = links

    elif isinstance(action, UpdateExperience):
        experience = dict(default_experience(), **(profile.experience or {}))
        experience.update(action.experience.model_dump(by_alias=True, exclude_none=True))
        profile.experience = experience

    elif isinstance(action, UpdateSkills):
        profile.skills = [s.model_dump(by_alias=True) for s in action.skills]

    elif isinstance(action, UpdateTechnologies):
        profile.technologies = list(action.technologies)

    elif isinstance(action, UpdateEducation):
        profile.education = [e.model_dump(by_alias=True) for e in action.education]

    elif isinstance(action, UpdateCertifications):
        profile.certifications = [c.model_dump(by_alias=True) for c in action.certifications]

    elif isinstance(action, TogglePublish):
        profile.is_published = action.is_published

    else:
        raise ValueError(f"Unknown profile action {action!r}")


async def update_profile(db: AsyncSession, profile: Profile, action: ProfileAction) -> Profile:
    apply_action(profile, action)
    db.add(profile)
    await db.commit()
    await db.refresh(profile)
    return profile


def media_public_id(profile: Profile, slot: str) -> str:
    return getattr(profile, MEDIA_SLOTS[slot][1]) or ""


async def set_media(db: AsyncSession, profile: Profile, slot: str, upload: MediaUpload) -> Profile:
    url_attr, id_attr = MEDIA_SLOTS[slot]
    setattr(profile, url_attr, upload.url)
    setattr(profile, id_attr, upload.public_id)
    db.add(profile)
    await db.commit()
    await db.refresh(profile)
    return profile


async def clear_media(db: AsyncSession, profile: Profile, slot: str) -> Profile:
    url_attr, id_attr = MEDIA_SLOTS[slot]
    setattr(profile, url_attr, "")
    setattr(profile, id_attr, "")
    db.add(profile)
    await db.commit()
    await db.refresh(profile)
    return profile
