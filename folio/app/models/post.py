# folio/app/models/post.py
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON

from folio.app.db.base import Base, new_id, utcnow


class Post(Base):
    __tablename__ = "posts"

    id = Column(String(32), primary_key=True, default=new_id)

    title = Column(String(255), nullable=False)
    # Always derived from the title, see utils.text.slugify
    slug = Column(String(255), index=True, nullable=False)
    description = Column(Text, nullable=False, default="")
    content = Column(Text, nullable=False)
    excerpt = Column(Text, nullable=False, default="")

    # Media host URL plus the id needed to delete it later
    cover_image = Column(String(1024), nullable=False, default="")
    cover_image_public_id = Column(String(255), nullable=False, default="")

    category = Column(String(100), index=True, nullable=False, default="General")
    tags = Column(JSON, nullable=False, default=list)

    is_published = Column(Boolean, index=True, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)

    author_id = Column(String(32), nullable=False, default="admin")
    author_name = Column(String(100), nullable=False, default="Admin")

    # Only ever incremented
    views = Column(Integer, nullable=False, default=0)
    likes = Column(Integer, nullable=False, default=0)
    comments = Column(Integer, nullable=False, default=0)
    reading_time = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
