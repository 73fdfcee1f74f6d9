"""
Follow routes under /api/users.
"""
import uuid

from fastapi import APIRouter, Depends

from ..auth import get_required_user
from ..dependencies import Page, get_follow_service, list_page, suggestion_page
from ..models.user import User
from ..responses import message, page
from ..serializers import user_public
from ..services.follows import FollowService

router = APIRouter(prefix="/api/users", tags=["follows"])


@router.get("/suggested")
def suggested_users(
    pagination: Page = Depends(suggestion_page),
    current_user: User = Depends(get_required_user),
    follows: FollowService = Depends(get_follow_service),
):
    """Active users the caller does not follow yet."""
    users = follows.suggested(current_user.id, pagination.limit)
    return {"users": [user_public(u) for u in users], "limit": pagination.limit}


@router.post("/{user_id}/follow")
def follow_user(
    user_id: uuid.UUID,
    current_user: User = Depends(get_required_user),
    follows: FollowService = Depends(get_follow_service),
):
    follows.follow(current_user.id, user_id)
    return message("user followed successfully")


@router.delete("/{user_id}/follow")
def unfollow_user(
    user_id: uuid.UUID,
    current_user: User = Depends(get_required_user),
    follows: FollowService = Depends(get_follow_service),
):
    follows.unfollow(current_user.id, user_id)
    return message("user unfollowed successfully")


@router.get("/{user_id}/followers")
def get_followers(
    user_id: uuid.UUID,
    pagination: Page = Depends(list_page),
    follows: FollowService = Depends(get_follow_service),
):
    users, total = follows.followers(user_id, pagination.limit, pagination.offset)
    return page("followers", [user_public(u) for u in users], pagination.limit, pagination.offset, total)


@router.get("/{user_id}/following")
def get_following(
    user_id: uuid.UUID,
    pagination: Page = Depends(list_page),
    follows: FollowService = Depends(get_follow_service),
):
    users, total = follows.following(user_id, pagination.limit, pagination.offset)
    return page("following", [user_public(u) for u in users], pagination.limit, pagination.offset, total)


@router.get("/{user_id}/follow-status")
def follow_status(
    user_id: uuid.UUID,
    current_user: User = Depends(get_required_user),
    follows: FollowService = Depends(get_follow_service),
):
    return {"is_following": follows.is_following(current_user.id, user_id)}


@router.get("/{user_id}/follow-counts")
def follow_counts(user_id: uuid.UUID, follows: FollowService = Depends(get_follow_service)):
    return follows.counts(user_id)
