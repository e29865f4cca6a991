# folio/app/schemas/project.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from folio.app.schemas.base import CamelModel

ProjectStatus = Literal["completed", "in-progress", "planned", "on-hold"]
ProjectComplexity = Literal["beginner", "intermediate", "advanced"]

REQUIRED_FIELDS = ("title", "description", "short_description", "technologies")


def require_value(v, field_name: str):
    # "" and [] are reported the same way as an absent field
    if not v or (isinstance(v, str) and not v.strip()):
        raise ValueError(f"{to_camel(field_name)} is required")
    return v


class ProjectOut(CamelModel):
    id: str
    title: str
    description: str
    short_description: str
    technologies: List[str]
    featured_technologies: List[str]
    github_url: Optional[str] = None
    project_url: Optional[str] = None
    cover_image: str
    screenshots: List[str]
    is_featured: bool
    status: ProjectStatus
    complexity: ProjectComplexity
    project_date: datetime
    created_at: datetime
    updated_at: datetime


class ProjectCreate(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    short_description: str = Field(min_length=1)
    technologies: List[str]
    status: ProjectStatus
    github_url: Optional[str] = None
    project_url: Optional[str] = None
    cover_image: Optional[str] = None
    is_featured: bool = False
    complexity: ProjectComplexity = "intermediate"
    featured_technologies: List[str] = Field(default_factory=list)
    project_date: Optional[datetime] = None

    @field_validator(*REQUIRED_FIELDS, mode="before")
    @classmethod
    def blank_is_missing(cls, v, info: ValidationInfo):
        return require_value(v, info.field_name)


class ProjectUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    short_description: Optional[str] = None
    technologies: Optional[List[str]] = None
    github_url: Optional[str] = None
    project_url: Optional[str] = None
    is_featured: Optional[bool] = None
    status: Optional[ProjectStatus] = None
    complexity: Optional[ProjectComplexity] = None
    featured_technologies: Optional[List[str]] = None
    project_date: Optional[datetime] = None

    @field_validator(*REQUIRED_FIELDS, mode="before")
    @classmethod
    def blank_is_missing(cls, v, info: ValidationInfo):
        # None leaves the stored value alone
        if v is None:
            return v
        return require_value(v, info.field_name)


class ProjectResponse(CamelModel):
    project: ProjectOut
    message: Optional[str] = None


class ProjectsResponse(CamelModel):
    projects: List[ProjectOut]
