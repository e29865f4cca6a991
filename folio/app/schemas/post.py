# folio/app/schemas/post.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field, ValidationInfo, field_validator

from folio.app.schemas.base import CamelModel
from folio.app.utils.text import parse_bool, split_tags


class PostOut(CamelModel):
    id: str
    title: str
    slug: str
    description: str
    content: str
    excerpt: str
    cover_image: str
    category: str
    tags: List[str]
    is_published: bool
    is_featured: bool
    author_id: str
    author_name: str
    views: int
    likes: int
    comments: int
    reading_time: int
    created_at: datetime
    updated_at: datetime


class PostCreateForm(CamelModel):
    """Multipart body of POST /admin/posts (the image travels separately)."""
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    description: str = ""
    excerpt: Optional[str] = None
    category: str = "General"
    tags: List[str] = Field(default_factory=list)
    is_published: bool = False
    is_featured: bool = False

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v):
        return v if isinstance(v, list) else split_tags(v)

    @field_validator("title", "content", mode="before")
    @classmethod
    def blank_is_missing(cls, v, info: ValidationInfo):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError(f"{info.field_name} is required")
        return v

    @field_validator("is_published", "is_featured", mode="before")
    @classmethod
    def coerce_flags(cls, v):
        return parse_bool(v)


class PostUpdateForm(CamelModel):
    """Multipart body of PUT /admin/posts/{id}. Absent fields are left alone."""
    title: Optional[str] = None
    content: Optional[str] = None
    description: Optional[str] = None
    excerpt: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    is_published: Optional[bool] = None
    is_featured: Optional[bool] = None

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v):
        if v is None or isinstance(v, list):
            return v
        return split_tags(v)

    @field_validator("title", "content", mode="before")
    @classmethod
    def blank_is_missing(cls, v, info: ValidationInfo):
        # Absent is fine here; present but blank is not
        if isinstance(v, str) and not v.strip():
            raise ValueError(f"{info.field_name} is required")
        return v

    @field_validator("is_published", "is_featured", mode="before")
    @classmethod
    def coerce_flags(cls, v):
        return None if v is None else parse_bool(v)


class PostListResponse(CamelModel):
    posts: List[PostOut]
    featured_posts: List[PostOut]
    total_posts: int
    total_pages: int
    current_page: int
    categories: List[str]
    tags: List[str]


class PostDetailResponse(CamelModel):
    post: PostOut
    related_posts: List[PostOut]


class PostResponse(CamelModel):
    post: PostOut


class PostsResponse(CamelModel):
    posts: List[PostOut]
