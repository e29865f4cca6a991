# folio/app/services/projects.py
import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from folio.app.models.project import PROJECT_COMPLEXITIES, PROJECT_STATUSES, Project
from folio.app.schemas.project import ProjectCreate, ProjectUpdate
from folio.app.services.media import MediaUpload

logger = logging.getLogger(__name__)


async def list_projects(
    db: AsyncSession,
    status: Optional[str] = None,
    featured: bool = False,
) -> List[Project]:
    """Newest first. status=None or "all" means any status."""
    query = select(Project).order_by(Project.created_at.desc())
    if status and status != "all":
        query = query.where(Project.status == status)
    if featured:
        query = query.where(Project.is_featured.is_(True))

    result = await db.execute(query)
    return list(result.scalars().all())


async def get_project(db: AsyncSession, project_id: str) -> Optional[Project]:
    return await db.get(Project, project_id)


async def create_project(db: AsyncSession, data: ProjectCreate) -> Project:
    values = data.model_dump(exclude_none=True)
    project = Project(**values)
    db.add(project)
    await db.commit()
    await db.refresh(project)
    logger.info("Created project %s", project.id)
    return project


async def update_project(db: AsyncSession, project: Project, data: ProjectUpdate) -> Project:
    for key, value in data.model_dump(exclude_unset=True).items():
        # github/project URLs may be cleared, everything else is required
        if value is None and key not in ("github_url", "project_url"):
            continue
        setattr(project, key, value)

    db.add(project)
    await db.commit()
    await db.refresh(project)
    return project


async def set_cover_image(db: AsyncSession, project: Project, upload: MediaUpload) -> Project:
    project.cover_image = upload.url
    project.cover_image_public_id = upload.public_id
    db.add(project)
    await db.commit()
    await db.refresh(project)
    return project


async def clear_cover_image(db: AsyncSession, project: Project) -> Project:
    project.cover_image = ""
    project.cover_image_public_id = ""
    db.add(project)
    await db.commit()
    await db.refresh(project)
    return project


async def add_screenshot(db: AsyncSession, project: Project, upload: MediaUpload) -> Project:
    # Reassign rather than append so the JSON column is marked dirty
    project.screenshots = list(project.screenshots or []) + [upload.url]
    db.add(project)
    await db.commit()
    await db.refresh(project)
    return project


async def remove_screenshot(db: AsyncSession, project: Project, url: str) -> Project:
    project.screenshots = [s for s in project.screenshots or [] if s != url]
    db.add(project)
    await db.commit()
    await db.refresh(project)
    return project


async def delete_project(db: AsyncSession, project: Project) -> None:
    await db.delete(project)
    await db.commit()
    logger.info("Deleted project %s", project.id)


async def project_stats(db: AsyncSession) -> dict:
    async def count(*criteria) -> int:
        query = select(func.count(Project.id))
        if criteria:
            query = query.where(*criteria)
        result = await db.execute(query)
        return result.scalar_one()

    by_status = {status: await count(Project.status == status) for status in PROJECT_STATUSES}
    by_complexity = {
        level: await count(Project.complexity == level) for level in PROJECT_COMPLEXITIES
    }
    return {
        "totalProjects": await count(),
        "featuredProjects": await count(Project.is_featured.is_(True)),
        "byStatus": by_status,
        "byComplexity": by_complexity,
    }
