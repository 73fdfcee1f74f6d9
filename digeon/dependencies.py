"""
FastAPI dependencies: service providers and limit/offset pagination.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from .auth import get_current_user
from .database import get_db
from .models.user import User
from .services.comments import CommentService
from .services.follows import FollowService
from .services.likes import LikeService
from .services.media import MediaService
from .services.notifications import NotificationService
from .services.posts import PostService
from .services.search import SearchService
from .services.timeline import TimelineService
from .services.users import UserService


# ============================================================
# PAGINATION
# ============================================================

@dataclass
class Page:
    limit: int
    offset: int


def _to_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def clamp_page(limit: Optional[str], offset: Optional[str], default: int = 20, maximum: int = 100) -> Page:
    """Clamp raw query values instead of rejecting them."""
    limit_value = _to_int(limit)
    if limit_value is None or limit_value <= 0:
        limit_value = default
    limit_value = min(limit_value, maximum)

    offset_value = _to_int(offset)
    if offset_value is None or offset_value < 0:
        offset_value = 0
    return Page(limit=limit_value, offset=offset_value)


def paginate(default: int = 20, maximum: int = 100):
    """Build a dependency that yields a clamped ``Page``."""
    def dependency(
        limit: Optional[str] = Query(None),
        offset: Optional[str] = Query(None),
    ) -> Page:
        return clamp_page(limit, offset, default, maximum)

    return dependency


list_page = paginate(20, 100)
suggestion_page = paginate(10, 50)
search_all_page = paginate(30, 100)
trending_hashtags_page = paginate(20, 50)


# ============================================================
# SERVICES
# ============================================================

def get_viewer_id(current_user: Optional[User] = Depends(get_current_user)) -> Optional[uuid.UUID]:
    """Id of the caller for personalized flags, None when anonymous."""
    return current_user.id if current_user else None


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_post_service(db: Session = Depends(get_db)) -> PostService:
    return PostService(db)


def get_comment_service(db: Session = Depends(get_db)) -> CommentService:
    return CommentService(db)


def get_like_service(db: Session = Depends(get_db)) -> LikeService:
    return LikeService(db)


def get_follow_service(db: Session = Depends(get_db)) -> FollowService:
    return FollowService(db)


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    return NotificationService(db)


def get_media_service(db: Session = Depends(get_db)) -> MediaService:
    return MediaService(db)


def get_timeline_service(db: Session = Depends(get_db)) -> TimelineService:
    return TimelineService(db)


def get_search_service(db: Session = Depends(get_db)) -> SearchService:
    return SearchService(db)
