# folio/app/api/v1/endpoints/projects.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from folio.app.db.base import get_db
from folio.app.schemas.project import ProjectResponse, ProjectsResponse
from folio.app.services import projects as project_service

router = APIRouter()

# The public listing shows finished work unless asked otherwise
PUBLIC_DEFAULT_STATUS = "completed"


@router.get("", response_model=ProjectsResponse)
async def list_projects(
        status_filter: Optional[str] = Query(None, alias="status"),
        featured: bool = False,
        db: AsyncSession = Depends(get_db),
):
    projects = await project_service.list_projects(
        db,
        status=status_filter or PUBLIC_DEFAULT_STATUS,
        featured=featured,
    )
    return {"projects": projects}


@router.get("/{project_id}", response_model=ProjectResponse)
async def read_project(project_id: str, db: AsyncSession = Depends(get_db)):
    project = await project_service.get_project(db, project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return {"project": project}
