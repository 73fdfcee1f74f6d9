"""
Posts routes for creating, reading, editing and deleting posts.
"""
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, status

from ..auth import get_required_user
from ..dependencies import Page, get_post_service, get_timeline_service, get_viewer_id, list_page
from ..models.user import User
from ..responses import message
from ..schemas.posts import PostCreate, PostUpdate
from ..serializers import details_to_dict, timeline_to_dict
from ..services.posts import PostService
from ..services.timeline import TimelineService

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_post(
    body: PostCreate,
    current_user: User = Depends(get_required_user),
    posts: PostService = Depends(get_post_service),
):
    """Create an original post, reply, repost or quote."""
    details = posts.create(
        current_user.id,
        body.content,
        body.type,
        original_post_id=body.original_post_id,
        parent_post_id=body.parent_post_id,
        media_ids=body.media_ids,
        media_urls=body.media_urls,
        is_draft=body.is_draft,
        is_public=body.is_public,
    )
    return details_to_dict(details)


@router.get("/{post_id}")
def get_post(
    post_id: uuid.UUID,
    viewer_id: Optional[uuid.UUID] = Depends(get_viewer_id),
    posts: PostService = Depends(get_post_service),
):
    return details_to_dict(posts.get_with_details(post_id, viewer_id))


@router.put("/{post_id}")
def update_post(
    post_id: uuid.UUID,
    body: PostUpdate,
    current_user: User = Depends(get_required_user),
    posts: PostService = Depends(get_post_service),
):
    """Edit a post's content (author only)."""
    return details_to_dict(posts.update(post_id, current_user.id, body.content))


@router.delete("/{post_id}")
def delete_post(
    post_id: uuid.UUID,
    current_user: User = Depends(get_required_user),
    posts: PostService = Depends(get_post_service),
):
    """Delete a post (author only)."""
    posts.delete(post_id, current_user.id)
    return message("post deleted successfully")


@router.get("/{post_id}/replies")
def get_post_replies(
    post_id: uuid.UUID,
    pagination: Page = Depends(list_page),
    viewer_id: Optional[uuid.UUID] = Depends(get_viewer_id),
    timeline: TimelineService = Depends(get_timeline_service),
):
    """Direct replies to a post, oldest first."""
    return timeline_to_dict(timeline.replies(post_id, viewer_id, pagination.limit, pagination.offset))
