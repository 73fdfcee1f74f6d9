"""
Like routes under /api/posts.
"""
import uuid
from typing import Optional

from fastapi import APIRouter, Depends

from ..auth import get_required_user
from ..dependencies import Page, get_like_service, get_viewer_id, list_page
from ..models.user import User
from ..responses import message, page
from ..serializers import user_public
from ..services.likes import LikeService

router = APIRouter(prefix="/api/posts", tags=["likes"])


@router.post("/{post_id}/like")
def like_post(
    post_id: uuid.UUID,
    current_user: User = Depends(get_required_user),
    likes: LikeService = Depends(get_like_service),
):
    likes.like(current_user.id, post_id)
    return message("post liked successfully")


@router.delete("/{post_id}/like")
def unlike_post(
    post_id: uuid.UUID,
    current_user: User = Depends(get_required_user),
    likes: LikeService = Depends(get_like_service),
):
    likes.unlike(current_user.id, post_id)
    return message("post unliked successfully")


@router.get("/{post_id}/likes")
def get_post_likes(
    post_id: uuid.UUID,
    pagination: Page = Depends(list_page),
    viewer_id: Optional[uuid.UUID] = Depends(get_viewer_id),
    likes: LikeService = Depends(get_like_service),
):
    """Users who liked the post, most recent first."""
    users, total = likes.post_likers(post_id, viewer_id, pagination.limit, pagination.offset)
    return page("users", [user_public(u) for u in users], pagination.limit, pagination.offset, total)


@router.get("/{post_id}/like-status")
def like_status(
    post_id: uuid.UUID,
    current_user: User = Depends(get_required_user),
    likes: LikeService = Depends(get_like_service),
):
    return {"is_liked": likes.is_liked(current_user.id, post_id)}
