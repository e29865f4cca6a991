# folio/app/schemas/profile.py
"""
Schemas for the singleton profile.

PUT /admin/profile takes a JSON body whose "action" field picks the update;
each action has its own model, looked up in PROFILE_ACTIONS.
"""
from datetime import datetime
from typing import Dict, List, Literal, Optional, Union

from pydantic import Field

from folio.app.schemas.base import CamelModel

SkillLevel = Literal["beginner", "intermediate", "advanced", "expert"]


class Company(CamelModel):
    name: str
    position: str = ""
    duration: str = ""
    description: str = ""


class Experience(CamelModel):
    years: int = 0
    title: str = ""
    description: str = ""
    projects_completed: int = 0
    clients_count: int = 0
    companies: List[Company] = Field(default_factory=list)


class Skill(CamelModel):
    category: str
    items: List[str] = Field(default_factory=list)
    level: SkillLevel = "intermediate"


class Education(CamelModel):
    degree: str
    institution: str
    year: str = ""
    description: str = ""


class Certification(CamelModel):
    name: str
    issuer: str = ""
    year: str = ""
    url: str = ""


class ProfileOut(CamelModel):
    id: str
    full_name: str
    email: str
    phone: str
    title: str
    description: str
    bio: str
    profile_image: str
    cover_image: str
    cv_url: str
    social_links: Dict[str, str]
    experience: Experience
    technologies: List[str]
    skills: List[Skill]
    education: List[Education]
    certifications: List[Certification]
    stats: Dict[str, int]
    location: str
    availability: bool
    hourly_rate: Optional[int] = None
    contact_email: str
    is_published: bool
    created_at: datetime
    updated_at: datetime


class ProfileResponse(CamelModel):
    profile: ProfileOut
    message: Optional[str] = None


# ─────────────────────────────────────────────────────────────────────────────
# PUT /admin/profile actions
# ─────────────────────────────────────────────────────────────────────────────
class UpdateBasic(CamelModel):
    action: Literal["update-basic"]
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    availability: Optional[bool] = None
    hourly_rate: Optional[int] = None
    contact_email: Optional[str] = None


class UpdateSocial(CamelModel):
    action: Literal["update-social"]
    # Merged into the stored links
    social_links: Dict[str, str]


class UpdateSkills(CamelModel):
    action: Literal["update-skills"]
    skills: List[Skill]


class UpdateTechnologies(CamelModel):
    action: Literal["update-technologies"]
    technologies: List[str]


class ExperiencePatch(CamelModel):
    years: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    projects_completed: Optional[int] = None
    clients_count: Optional[int] = None
    companies: Optional[List[Company]] = None


class UpdateExperience(CamelModel):
    action: Literal["update-experience"]
    # Merged into the stored experience
    experience: ExperiencePatch


class UpdateEducation(CamelModel):
    action: Literal["update-education"]
    education: List[Education]


class UpdateCertifications(CamelModel):
    action: Literal["update-certifications"]
    certifications: List[Certification]


class TogglePublish(CamelModel):
    action: Literal["toggle-publish"]
    is_published: bool


PROFILE_ACTIONS = {
    "update-basic": UpdateBasic,
    "update-social": UpdateSocial,
    "update-skills": UpdateSkills,
    "update-technologies": UpdateTechnologies,
    "update-experience": UpdateExperience,
    "update-education": UpdateEducation,
    "update-certifications": UpdateCertifications,
    "toggle-publish": TogglePublish,
}

ProfileAction = Union[
    UpdateBasic,
    UpdateSocial,
    UpdateSkills,
    UpdateTechnologies,
    UpdateExperience,
    UpdateEducation,
    UpdateCertifications,
    TogglePublish,
]
