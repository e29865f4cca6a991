# folio/app/api/v1/endpoints/admin_stats.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from folio.app.db.base import get_db
from folio.app.services import posts as post_service
from folio.app.services import projects as project_service

router = APIRouter()


async def collect_stats(db: AsyncSession) -> dict:
    return {
        "posts": await post_service.post_stats(db),
        "projects": await project_service.project_stats(db),
    }


@router.get("")
async def read_stats(db: AsyncSession = Depends(get_db)):
    return {"stats": await collect_stats(db)}
