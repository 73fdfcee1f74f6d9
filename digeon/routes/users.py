"""
User profile routes.
"""
import uuid
from typing import Optional

from fastapi import APIRouter, Depends

from ..auth import get_required_user
from ..dependencies import (
    Page,
    get_like_service,
    get_post_service,
    get_user_service,
    get_viewer_id,
    list_page,
)
from ..models.user import User
from ..responses import page
from ..schemas.users import ProfileUpdate
from ..serializers import details_to_dict, user_private, user_public
from ..services.likes import LikeService
from ..services.posts import PostService
from ..services.users import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.put("/profile")
def update_profile(
    body: ProfileUpdate,
    current_user: User = Depends(get_required_user),
    users: UserService = Depends(get_user_service),
):
    """Update the caller's own profile fields."""
    user = users.update_profile(current_user, body.model_dump(exclude_unset=True))
    return user_private(user, users.counts(user.id))


@router.get("/username/{username}")
def get_user_by_username(username: str, users: UserService = Depends(get_user_service)):
    user = users.get_by_username(username)
    return user_public(user, users.counts(user.id))


@router.get("/{user_id}")
def get_user(user_id: uuid.UUID, users: UserService = Depends(get_user_service)):
    user = users.get(user_id)
    return user_public(user, users.counts(user.id))


@router.get("/{user_id}/posts")
def get_user_posts(
    user_id: uuid.UUID,
    pagination: Page = Depends(list_page),
    viewer_id: Optional[uuid.UUID] = Depends(get_viewer_id),
    users: UserService = Depends(get_user_service),
    posts: PostService = Depends(get_post_service),
):
    """Published posts of a user, newest first."""
    users.get(user_id)
    items, total = posts.list_by_author(user_id, viewer_id, pagination.limit, pagination.offset)
    return page("posts", [details_to_dict(d) for d in items], pagination.limit, pagination.offset, total)


@router.get("/{user_id}/likes")
def get_user_likes(
    user_id: uuid.UUID,
    pagination: Page = Depends(list_page),
    viewer_id: Optional[uuid.UUID] = Depends(get_viewer_id),
    users: UserService = Depends(get_user_service),
    likes: LikeService = Depends(get_like_service),
):
    """Posts the user liked, most recent like first."""
    users.get(user_id)
    items, total = likes.user_likes(user_id, viewer_id, pagination.limit, pagination.offset)
    return page("posts", [details_to_dict(d) for d in items], pagination.limit, pagination.offset, total)
