# folio/app/api/pages.py
"""
The admin page namespace.

Markup is rendered elsewhere; these endpoints only decide who may see
/admin and everything under it, and hand the dashboard its data. Anyone
without a session is redirected to /login, a signed-in non-admin to
/unauthorized.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from folio.app.api.deps import require_admin_page
from folio.app.api.v1.endpoints.admin_stats import collect_stats
from folio.app.db.base import get_db
from folio.app.models.user import User
from folio.app.schemas.user import UserPublic

router = APIRouter(dependencies=[Depends(require_admin_page)])

public_router = APIRouter()


@router.get("/admin")
async def admin_dashboard(
        db: AsyncSession = Depends(get_db),
        admin: User = Depends(require_admin_page),
):
    return {
        "page": "dashboard",
        "user": UserPublic.model_validate(admin),
        "stats": await collect_stats(db),
    }


@router.get("/admin/{page_path:path}")
async def admin_page(page_path: str, admin: User = Depends(require_admin_page)):
    return {"page": page_path, "user": UserPublic.model_validate(admin)}


@public_router.get("/unauthorized")
async def unauthorized():
    return {
        "page": "unauthorized",
        "message": "You do not have permission to access the admin area",
    }
