"""
Home, explore and trending timelines.
"""
import uuid
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from ..logging_config import get_logger, timed
from ..models.follow import Follow
from ..models.mixins import utcnow
from ..models.post import Post
from .posts import PostService, PostWithDetails

logger = get_logger("timeline")

TRENDING_WINDOW = timedelta(days=7)


@dataclass
class TimelinePage:
    posts: List[PostWithDetails] = field(default_factory=list)
    limit: int = 20
    offset: int = 0
    total: int = 0


class TimelineService:
    def __init__(self, db: Session, posts: Optional[PostService] = None):
        self.db = db
        self.posts = posts or PostService(db)

    def _visible(self):
        return self.posts.live().filter(Post.is_draft.is_(False), Post.is_public.is_(True))

    def _page(self, query, order, viewer_id: Optional[uuid.UUID], limit: int, offset: int) -> TimelinePage:
        total = query.count()
        posts = query.order_by(*order).offset(offset).limit(limit).all()
        return TimelinePage(self.posts.annotate(posts, viewer_id), limit, offset, total)

    def home(self, user_id: uuid.UUID, limit: int, offset: int) -> TimelinePage:
        """Posts by the user and by everyone they follow, newest first."""
        followed = select(Follow.following_id).where(
            Follow.follower_id == user_id,
            Follow.deleted_at.is_(None),
        )
        query = self._visible().filter(or_(Post.author_id == user_id, Post.author_id.in_(followed)))
        return self._page(query, [Post.created_at.desc()], user_id, limit, offset)

    def explore(self, viewer_id: Optional[uuid.UUID], limit: int, offset: int) -> TimelinePage:
        return self._page(self._visible(), [Post.created_at.desc()], viewer_id, limit, offset)

    @timed(logger)
    def trending(self, viewer_id: Optional[uuid.UUID], limit: int, offset: int) -> TimelinePage:
        """Last week's posts ranked by likes + reposts + comments, ties newest first."""
        score = Post.likes_count + Post.reposts_count + Post.comments_count
        query = self._visible().filter(Post.created_at >= utcnow() - TRENDING_WINDOW)
        return self._page(query, [score.desc(), Post.created_at.desc()], viewer_id, limit, offset)

    def replies(self, post_id: uuid.UUID, viewer_id: Optional[uuid.UUID], limit: int, offset: int) -> TimelinePage:
        self.posts.get_visible(post_id, viewer_id)
        query = self._visible().filter(Post.parent_post_id == post_id)
        return self._page(query, [Post.created_at.asc()], viewer_id, limit, offset)
