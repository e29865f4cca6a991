# folio/app/services/posts.py
import logging
from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from folio.app.models.post import Post
from folio.app.schemas.post import PostCreateForm, PostUpdateForm
from folio.app.services.media import MediaUpload
from folio.app.utils.text import make_excerpt, reading_time, slugify

logger = logging.getLogger(__name__)

RELATED_LIMIT = 3


async def list_posts(db: AsyncSession, status: Optional[str] = None) -> List[Post]:
    """All posts, newest first. status: published | draft | featured."""
    query = select(Post).order_by(Post.created_at.desc())
    if status == "published":
        query = query.where(Post.is_published.is_(True))
    elif status == "draft":
        query = query.where(Post.is_published.is_(False))
    elif status == "featured":
        query = query.where(Post.is_featured.is_(True))

    result = await db.execute(query)
    return list(result.scalars().all())


async def list_published(db: AsyncSession) -> List[Post]:
    return await list_posts(db, status="published")


async def get_post(db: AsyncSession, post_id: str) -> Optional[Post]:
    return await db.get(Post, post_id)


async def related_posts(db: AsyncSession, post: Post, limit: int = RELATED_LIMIT) -> List[Post]:
    """Other published posts in the same category, newest first."""
    result = await db.execute(
        select(Post)
        .where(
            Post.is_published.is_(True),
            Post.category == post.category,
            Post.id != post.id,
        )
        .order_by(Post.created_at.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def increment_views(db: AsyncSession, post: Post) -> Post:
    # Single UPDATE so concurrent readers never lose a count
    await db.execute(
        update(Post).where(Post.id == post.id).values(views=Post.views + 1)
    )
    await db.commit()
    await db.refresh(post)
    return post


async def create_post(
    db: AsyncSession,
    data: PostCreateForm,
    author_id: str,
    author_name: str,
    cover: Optional[MediaUpload] = None,
) -> Post:
    post = Post(
        title=data.title,
        slug=slugify(data.title),
        description=data.description,
        content=data.content,
        excerpt=data.excerpt or make_excerpt(data.description or data.content),
        category=data.category or "General",
        tags=data.tags,
        is_published=data.is_published,
        is_featured=data.is_featured,
        author_id=author_id,
        author_name=author_name,
        reading_time=reading_time(data.content),
    )
    if cover is not None:
        post.cover_image = cover.url
        post.cover_image_public_id = cover.public_id

    db.add(post)
    await db.commit()
    await db.refresh(post)
    logger.info("Created post %s (%s)", post.id, post.slug)
    return post


async def update_post(
    db: AsyncSession,
    post: Post,
    data: PostUpdateForm,
    cover: Optional[MediaUpload] = None,
) -> Post:
    updates = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
    for key, value in updates.items():
        setattr(post, key, value)

    if "title" in updates:
        post.slug = slugify(post.title)
    if "content" in updates:
        post.reading_time = reading_time(post.content)
    if cover is not None:
        post.cover_image = cover.url
        post.cover_image_public_id = cover.public_id

    db.add(post)
    await db.commit()
    await db.refresh(post)
    return post


async def delete_post(db: AsyncSession, post: Post) -> None:
    await db.delete(post)
    await db.commit()
    logger.info("Deleted post %s", post.id)


async def post_stats(db: AsyncSession) -> dict:
    totals = await db.execute(
        select(
            func.count(Post.id),
            func.coalesce(func.sum(Post.views), 0),
            func.coalesce(func.sum(Post.likes), 0),
            func.coalesce(func.sum(Post.comments), 0),
        )
    )
    total, views, likes, comments = totals.one()

    async def count(*criteria) -> int:
        query = select(func.count(Post.id))
        if criteria:
            query = query.where(*criteria)
        result = await db.execute(query)
        return result.scalar_one()

    published = await count(Post.is_published.is_(True))
    return {
        "totalPosts": total,
        "publishedPosts": published,
        "draftPosts": total - published,
        "featuredPosts": await count(Post.is_featured.is_(True)),
        "totalViews": views,
        "totalLikes": likes,
        "totalComments": comments,
    }
