# folio/app/api/v1/endpoints/admin_projects.py
"""
Admin CRUD for projects.

POST on the collection does double duty: a JSON body creates a project, a
multipart body with an "action" field uploads an image to an existing one.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from folio.app.api.forms import read_body
from folio.app.db.base import get_db
from folio.app.models.project import Project
from folio.app.schemas.base import decode
from folio.app.schemas.project import (
    ProjectCreate,
    ProjectResponse,
    ProjectsResponse,
    ProjectUpdate,
)
from folio.app.schemas.user import MessageResponse
from folio.app.services import projects as project_service
from folio.app.services.media import discard, get_media_host, media_folder

logger = logging.getLogger(__name__)

router = APIRouter()

UPLOAD_ACTIONS = ("upload-cover-image", "upload-screenshot")
DELETE_ACTIONS = ("delete-cover-image", "delete-screenshot")


async def get_project_or_404(project_id: str, db: AsyncSession = Depends(get_db)) -> Project:
    project = await project_service.get_project(db, project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


def check_action(action: Optional[str], allowed) -> str:
    if not action:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Action parameter required")
    if action not in allowed:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid action")
    return action


@router.get("", response_model=ProjectsResponse)
async def list_projects(
        status_filter: Optional[str] = Query(None, alias="status"),
        featured: bool = False,
        db: AsyncSession = Depends(get_db),
):
    projects = await project_service.list_projects(db, status=status_filter, featured=featured)
    return {"projects": projects}


@router.post("", response_model=ProjectResponse)
async def create_or_upload(
        request: Request,
        response: Response,
        db: AsyncSession = Depends(get_db),
        media=Depends(get_media_host),
):
    body = await read_body(request)

    if not body.is_multipart:
        data = decode(ProjectCreate, body.fields)
        project = await project_service.create_project(db, data)
        response.status_code = status.HTTP_201_CREATED
        return {"project": project, "message": "Project created successfully"}

    action = check_action(body.fields.get("action"), UPLOAD_ACTIONS)
    image = body.file("image")
    project_id = body.fields.get("projectId") or body.fields.get("project_id")
    if image is None or not project_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Image file and projectId required",
        )

    project = await get_project_or_404(project_id, db)
    data = await image.read()

    if action == "upload-cover-image":
        previous_public_id = project.cover_image_public_id
        upload = await media.upload(data, media_folder("projects"), filename=image.filename)
        project = await project_service.set_cover_image(db, project, upload)
        await discard(media, previous_public_id)
        message = "Cover image uploaded successfully"
    else:
        upload = await media.upload(
            data, media_folder("projects", "screenshots"), filename=image.filename
        )
        project = await project_service.add_screenshot(db, project, upload)
        message = "Screenshot uploaded successfully"

    logger.info("%s for project %s", message, project.id)
    return {"project": project, "message": message}


@router.get("/{project_id}", response_model=ProjectResponse)
async def read_project(project: Project = Depends(get_project_or_404)):
    return {"project": project}


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
        request: Request,
        project: Project = Depends(get_project_or_404),
        db: AsyncSession = Depends(get_db),
):
    body = await read_body(request)
    data = decode(ProjectUpdate, body.fields)
    project = await project_service.update_project(db, project, data)
    return {"project": project, "message": "Project updated successfully"}


@router.delete("/{project_id}")
async def delete_project(
        action: Optional[str] = None,
        url: Optional[str] = None,
        project: Project = Depends(get_project_or_404),
        db: AsyncSession = Depends(get_db),
        media=Depends(get_media_host),
):
    """
    Without ?action the whole project goes. With
    ?action=delete-cover-image or ?action=delete-screenshot&url=... only
    that image is removed and the updated project is returned.
    """
    if action is None:
        await discard(media, project.cover_image_public_id)
        await project_service.delete_project(db, project)
        return MessageResponse(message="Project deleted successfully")

    check_action(action, DELETE_ACTIONS)

    if action == "delete-cover-image":
        await discard(media, project.cover_image_public_id)
        project = await project_service.clear_cover_image(db, project)
        message = "Cover image deleted successfully"
    else:
        if not url:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Screenshot URL required")
        # Screenshots are stored by URL only, so the hosted file stays
        project = await project_service.remove_screenshot(db, project, url)
        message = "Screenshot deleted successfully"

    return ProjectResponse.model_validate(
        {"project": project, "message": message}, from_attributes=True
    )
