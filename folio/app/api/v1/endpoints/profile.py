# folio/app/api/v1/endpoints/profile.py
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from folio.app.db.base import get_db
from folio.app.schemas.profile import ProfileResponse
from folio.app.services import profile as profile_service
from folio.app.services.media import get_media_host

router = APIRouter()

CV_FILENAME = "CV_Resume.pdf"


@router.get("", response_model=ProfileResponse)
async def read_profile(db: AsyncSession = Depends(get_db)):
    profile = await profile_service.get_published_profile(db)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found or not published",
        )
    return {"profile": profile}


@router.get("/cv")
async def read_cv(
        download: bool = False,
        db: AsyncSession = Depends(get_db),
        media=Depends(get_media_host),
):
    """Proxy the published CV as a PDF, shown inline or as a download."""
    profile = await profile_service.get_published_profile(db)
    if profile is None or not profile.cv_url:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="CV not found")

    data = await media.fetch(profile.cv_url)
    disposition = "attachment" if download else "inline"
    return Response(
        content=data,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'{disposition}; filename="{CV_FILENAME}"',
            "Cache-Control": "public, max-age=31536000, immutable",
            "X-Content-Type-Options": "nosniff",
        },
    )
