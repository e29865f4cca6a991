# folio/app/api/v1/endpoints/admin_posts.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from folio.app.api.deps import get_current_admin
from folio.app.api.forms import read_body
from folio.app.db.base import get_db
from folio.app.models.post import Post
from folio.app.models.user import User
from folio.app.schemas.base import decode
from folio.app.schemas.post import PostCreateForm, PostResponse, PostsResponse, PostUpdateForm
from folio.app.schemas.user import MessageResponse
from folio.app.services import posts as post_service
from folio.app.services.media import discard, get_media_host, media_folder

logger = logging.getLogger(__name__)

router = APIRouter()

POSTS_FOLDER = "posts"


async def get_post_or_404(post_id: str, db: AsyncSession = Depends(get_db)) -> Post:
    post = await post_service.get_post(db, post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


async def upload_cover(media, image):
    if image is None:
        return None
    data = await image.read()
    return await media.upload(data, media_folder(POSTS_FOLDER), filename=image.filename)


@router.get("", response_model=PostsResponse)
async def list_posts(
        status_filter: Optional[str] = Query(None, alias="status"),
        db: AsyncSession = Depends(get_db),
):
    return {"posts": await post_service.list_posts(db, status=status_filter)}


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
        request: Request,
        db: AsyncSession = Depends(get_db),
        admin: User = Depends(get_current_admin),
        media=Depends(get_media_host),
):
    body = await read_body(request)
    data = decode(PostCreateForm, body.fields)

    cover = await upload_cover(media, body.file("image"))
    post = await post_service.create_post(
        db, data, author_id=admin.id, author_name=admin.username, cover=cover
    )
    return {"post": post}


@router.get("/{post_id}", response_model=PostResponse)
async def read_post(post: Post = Depends(get_post_or_404)):
    return {"post": post}


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
        request: Request,
        post: Post = Depends(get_post_or_404),
        db: AsyncSession = Depends(get_db),
        media=Depends(get_media_host),
):
    body = await read_body(request)
    data = decode(PostUpdateForm, body.fields)

    previous_public_id = post.cover_image_public_id
    cover = await upload_cover(media, body.file("image"))
    post = await post_service.update_post(db, post, data, cover=cover)
    if cover is not None:
        await discard(media, previous_public_id)
        logger.info("Replaced cover image of post %s", post.id)
    return {"post": post}


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
        post: Post = Depends(get_post_or_404),
        db: AsyncSession = Depends(get_db),
        media=Depends(get_media_host),
):
    await discard(media, post.cover_image_public_id)
    await post_service.delete_post(db, post)
    return {"message": "Post deleted successfully"}
