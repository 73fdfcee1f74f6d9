"""
Substring search over users, posts and hashtags, plus trending hashtags.
"""
import uuid
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional, Tuple

from sqlalchemy import case, func, or_
from sqlalchemy.orm import Session

from ..logging_config import get_logger, timed
from ..models.mixins import utcnow
from ..models.post import Hashtag, Post, post_hashtags
from ..models.user import User
from .hashtags import normalize_hashtag
from .posts import PostService, PostWithDetails

logger = get_logger("search")

TRENDING_WINDOW = timedelta(days=7)
MIN_CATEGORY_LIMIT = 3


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _contains(column, term: str):
    return func.lower(column).like(f"%{escape_like(term)}%", escape="\\")


def _relevance(column, term: str):
    """0 for an exact match, 1 for a prefix match, 2 otherwise."""
    lowered = func.lower(column)
    return case(
        (lowered == term, 0),
        (lowered.like(f"{escape_like(term)}%", escape="\\"), 1),
        else_=2,
    )


@dataclass
class SearchResults:
    users: List[User] = field(default_factory=list)
    posts: List[PostWithDetails] = field(default_factory=list)
    hashtags: List[Hashtag] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.users) + len(self.posts) + len(self.hashtags)


class SearchService:
    def __init__(self, db: Session, posts: Optional[PostService] = None):
        self.db = db
        self.posts = posts or PostService(db)

    def users(self, query: str, limit: int, offset: int) -> Tuple[List[User], int]:
        term = (query or "").strip().lower()
        if not term:
            return [], 0

        q = self.db.query(User).filter(
            User.deleted_at.is_(None),
            User.is_active.is_(True),
            or_(_contains(User.username, term), _contains(User.display_name, term)),
        )
        total = q.count()
        users = (
            q.order_by(_relevance(User.username, term), User.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return users, total

    def _visible_posts(self):
        return self.posts.live().filter(Post.is_draft.is_(False), Post.is_public.is_(True))

    def posts_matching(
        self, query: str, viewer_id: Optional[uuid.UUID], limit: int, offset: int
    ) -> Tuple[List[PostWithDetails], int]:
        term = (query or "").strip().lower()
        if not term:
            return [], 0

        q = self._visible_posts().filter(_contains(Post.content, term))
        total = q.count()
        posts = q.order_by(Post.created_at.desc()).offset(offset).limit(limit).all()
        return self.posts.annotate(posts, viewer_id), total

    def hashtags(self, query: str, limit: int, offset: int) -> Tuple[List[Hashtag], int]:
        term = normalize_hashtag(query)
        if not term:
            return [], 0

        q = self.db.query(Hashtag).filter(_contains(Hashtag.name, term))
        total = q.count()
        hashtags = (
            q.order_by(_relevance(Hashtag.name, term), Hashtag.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return hashtags, total

    def hashtag_posts(
        self, hashtag: str, viewer_id: Optional[uuid.UUID], limit: int, offset: int
    ) -> Tuple[List[PostWithDetails], int]:
        """Posts tagged with ``hashtag``, newest first."""
        name = normalize_hashtag(hashtag)
        if not name:
            return [], 0

        q = (
            self._visible_posts()
            .join(post_hashtags, post_hashtags.c.post_id == Post.id)
            .join(Hashtag, Hashtag.id == post_hashtags.c.hashtag_id)
            .filter(Hashtag.name == name)
        )
        total = q.count()
        posts = q.order_by(Post.created_at.desc()).offset(offset).limit(limit).all()
        return self.posts.annotate(posts, viewer_id), total

    def search_all(self, query: str, viewer_id: Optional[uuid.UUID], limit: int) -> SearchResults:
        """Users, posts and hashtags for one query, each capped at a third of ``limit``."""
        per_category = max(limit // 3, MIN_CATEGORY_LIMIT)
        users, _ = self.users(query, per_category, 0)
        posts, _ = self.posts_matching(query, viewer_id, per_category, 0)
        hashtags, _ = self.hashtags(query, per_category, 0)
        return SearchResults(users, posts, hashtags)

    @timed(logger)
    def trending_hashtags(self, limit: int) -> List[Tuple[Hashtag, int]]:
        """Hashtags ranked by public posts in the last week."""
        post_count = func.count(Post.id).label("post_count")
        rows = (
            self.db.query(Hashtag, post_count)
            .join(post_hashtags, post_hashtags.c.hashtag_id == Hashtag.id)
            .join(Post, Post.id == post_hashtags.c.post_id)
            .filter(
                Post.deleted_at.is_(None),
                Post.is_draft.is_(False),
                Post.is_public.is_(True),
                Post.created_at >= utcnow() - TRENDING_WINDOW,
            )
            .group_by(Hashtag.id)
            .order_by(post_count.desc(), Hashtag.name.asc())
            .limit(limit)
            .all()
        )
        return [(hashtag, count) for hashtag, count in rows]
