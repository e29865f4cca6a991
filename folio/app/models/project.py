# folio/app/models/project.py
from sqlalchemy import Column, String, Text, Boolean, DateTime, JSON

from folio.app.db.base import Base, new_id, utcnow

PROJECT_STATUSES = ("completed", "in-progress", "planned", "on-hold")
PROJECT_COMPLEXITIES = ("beginner", "intermediate", "advanced")


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(32), primary_key=True, default=new_id)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    short_description = Column(String(500), nullable=False)
    # Ordered, as entered
    technologies = Column(JSON, nullable=False, default=list)
    featured_technologies = Column(JSON, nullable=False, default=list)

    github_url = Column(String(1024), nullable=True)
    project_url = Column(String(1024), nullable=True)

    cover_image = Column(String(1024), nullable=False, default="")
    cover_image_public_id = Column(String(255), nullable=False, default="")
    # List of media host URLs
    screenshots = Column(JSON, nullable=False, default=list)

    is_featured = Column(Boolean, nullable=False, default=False)
    # One of PROJECT_STATUSES
    status = Column(String(20), index=True, nullable=False, default="completed")
    # One of PROJECT_COMPLEXITIES
    complexity = Column(String(20), nullable=False, default="intermediate")

    project_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
