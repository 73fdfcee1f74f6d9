"""
Comment routes: comments on posts and nested replies.
"""
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, status

from ..auth import get_required_user
from ..dependencies import Page, get_comment_service, get_viewer_id, list_page
from ..models.user import User
from ..responses import message, page
from ..schemas.comments import CommentCreate, CommentUpdate
from ..serializers import comment_to_dict
from ..services.comments import CommentService

router = APIRouter(prefix="/api", tags=["comments"])


@router.post("/posts/{post_id}/comments", status_code=status.HTTP_201_CREATED)
def create_comment(
    post_id: uuid.UUID,
    body: CommentCreate,
    current_user: User = Depends(get_required_user),
    comments: CommentService = Depends(get_comment_service),
):
    return comment_to_dict(comments.create_comment(current_user.id, post_id, body.content))


@router.get("/posts/{post_id}/comments")
def get_comments(
    post_id: uuid.UUID,
    pagination: Page = Depends(list_page),
    viewer_id: Optional[uuid.UUID] = Depends(get_viewer_id),
    comments: CommentService = Depends(get_comment_service),
):
    """Comments on a post, oldest first."""
    items, total = comments.list_comments(post_id, viewer_id, pagination.limit, pagination.offset)
    return page("comments", [comment_to_dict(c) for c in items], pagination.limit, pagination.offset, total)


@router.put("/comments/{comment_id}")
def update_comment(
    comment_id: uuid.UUID,
    body: CommentUpdate,
    current_user: User = Depends(get_required_user),
    comments: CommentService = Depends(get_comment_service),
):
    return comment_to_dict(comments.update_comment(comment_id, current_user.id, body.content))


@router.delete("/comments/{comment_id}")
def delete_comment(
    comment_id: uuid.UUID,
    current_user: User = Depends(get_required_user),
    comments: CommentService = Depends(get_comment_service),
):
    comments.delete_comment(comment_id, current_user.id)
    return message("comment deleted successfully")


@router.post("/comments/{comment_id}/replies", status_code=status.HTTP_201_CREATED)
def create_reply(
    comment_id: uuid.UUID,
    body: CommentCreate,
    current_user: User = Depends(get_required_user),
    comments: CommentService = Depends(get_comment_service),
):
    return comment_to_dict(comments.create_reply(current_user.id, comment_id, body.content))


@router.get("/comments/{comment_id}/replies")
def get_replies(
    comment_id: uuid.UUID,
    pagination: Page = Depends(list_page),
    viewer_id: Optional[uuid.UUID] = Depends(get_viewer_id),
    comments: CommentService = Depends(get_comment_service),
):
    """Replies to a comment, oldest first."""
    items, total = comments.list_replies(comment_id, viewer_id, pagination.limit, pagination.offset)
    return page("replies", [comment_to_dict(c) for c in items], pagination.limit, pagination.offset, total)
