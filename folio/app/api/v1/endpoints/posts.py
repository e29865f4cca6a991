# folio/app/api/v1/endpoints/posts.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from folio.app.db.base import get_db
from folio.app.schemas.post import PostDetailResponse, PostListResponse
from folio.app.services import posts as post_service
from folio.app.utils import filters

router = APIRouter()


@router.get("", response_model=PostListResponse)
async def list_posts(
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=100),
        category: Optional[str] = None,
        tag: Optional[str] = None,
        search: Optional[str] = None,
        db: AsyncSession = Depends(get_db),
):
    published = await post_service.list_published(db)
    matching = filters.filter_posts(published, category=category, tag=tag, search=search)

    return {
        "posts": filters.paginate(matching, page, limit),
        "featured_posts": filters.featured(published),
        "total_posts": len(matching),
        "total_pages": filters.total_pages(len(matching), limit),
        "current_page": page,
        "categories": filters.categories(published),
        "tags": filters.tag_facets(published),
    }


@router.get("/{post_id}", response_model=PostDetailResponse)
async def read_post(post_id: str, db: AsyncSession = Depends(get_db)):
    post = await post_service.get_post(db, post_id)
    # Drafts are invisible to the public
    if post is None or not post.is_published:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")

    post = await post_service.increment_views(db, post)
    related = await post_service.related_posts(db, post)
    return {"post": post, "related_posts": related}
