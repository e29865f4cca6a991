# folio/app/models/profile.py
"""
The portfolio owner's profile.

There is a single profile document. It is created lazily the first time an
admin opens it and only exposed publicly once is_published is set.
Nested sections (social links, experience, skills, ...) are stored as JSON so
the record keeps its document shape.
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON

from folio.app.db.base import Base, new_id, utcnow

SOCIAL_NETWORKS = (
    "github",
    "linkedin",
    "twitter",
    "facebook",
    "instagram",
    "website",
    "youtube",
    "dribbble",
    "behance",
    "medium",
    "stackoverflow",
)


def default_social_links() -> dict:
    return {network: "" for network in SOCIAL_NETWORKS}


def default_experience() -> dict:
    return {
        "years": 0,
        "title": "",
        "description": "",
        "projectsCompleted": 0,
        "clientsCount": 0,
        "companies": [],
    }


def default_stats() -> dict:
    return {
        "postsCount": 0,
        "projectsCount": 0,
        "servicesCount": 0,
        "viewsCount": 0,
        "githubRepos": 0,
        "githubStars": 0,
    }


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(32), primary_key=True, default=new_id)

    # Basic information
    full_name = Column(String(255), nullable=False, default="")
    email = Column(String(255), nullable=False, default="")
    phone = Column(String(50), nullable=False, default="")
    title = Column(String(255), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    bio = Column(Text, nullable=False, default="")

    # Media host URLs and the public ids needed to delete them
    profile_image = Column(String(1024), nullable=False, default="")
    profile_image_public_id = Column(String(255), nullable=False, default="")
    cover_image = Column(String(1024), nullable=False, default="")
    cover_image_public_id = Column(String(255), nullable=False, default="")
    cv_url = Column(String(1024), nullable=False, default="")
    cv_public_id = Column(String(255), nullable=False, default="")

    # JSON sections, camelCase keys as sent over the wire
    social_links = Column(JSON, nullable=False, default=default_social_links)
    experience = Column(JSON, nullable=False, default=default_experience)
    technologies = Column(JSON, nullable=False, default=list)
    skills = Column(JSON, nullable=False, default=list)
    education = Column(JSON, nullable=False, default=list)
    certifications = Column(JSON, nullable=False, default=list)
    stats = Column(JSON, nullable=False, default=default_stats)

    # Contact
    location = Column(String(255), nullable=False, default="")
    availability = Column(Boolean, nullable=False, default=True)
    hourly_rate = Column(Integer, nullable=True)
    contact_email = Column(String(255), nullable=False, default="")

    is_published = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
