# folio/app/api/v1/router.py
from fastapi import APIRouter, Depends

from folio.app.api.deps import get_current_admin
from folio.app.api.v1.endpoints import (
    admin_posts,
    admin_profile,
    admin_projects,
    admin_stats,
    auth,
    posts,
    profile,
    projects,
)

api_router = APIRouter()

# Public
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])

# Admin: every route below requires an administrator session
admin_only = [Depends(get_current_admin)]
api_router.include_router(admin_posts.router, prefix="/admin/posts", tags=["admin"], dependencies=admin_only)
api_router.include_router(admin_projects.router, prefix="/admin/projects", tags=["admin"], dependencies=admin_only)
api_router.include_router(admin_profile.router, prefix="/admin/profile", tags=["admin"], dependencies=admin_only)
api_router.include_router(admin_stats.router, prefix="/admin/stats", tags=["admin"], dependencies=admin_only)
