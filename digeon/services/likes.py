"""
Likes and the post like counter.
"""
import uuid
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import errors
from ..logging_config import get_logger
from ..models.like import Like
from ..models.post import Post
from ..models.user import User
from .notifications import NotificationService
from .posts import PostService, PostWithDetails, published_to

logger = get_logger("likes")


class LikeService:
    def __init__(self, db: Session, posts: Optional[PostService] = None):
        self.db = db
        self.posts = posts or PostService(db)
        self.notifications: NotificationService = self.posts.notifications

    def _active_like(self, user_id: uuid.UUID, post_id: uuid.UUID) -> Optional[Like]:
        return self.db.query(Like).filter(
            Like.user_id == user_id,
            Like.post_id == post_id,
            Like.deleted_at.is_(None),
        ).first()

    def like(self, user_id: uuid.UUID, post_id: uuid.UUID) -> Like:
        post = self.posts.get_visible(post_id, user_id)
        if self._active_like(user_id, post_id):
            raise errors.conflict("post already liked")

        like = Like(user_id=user_id, post_id=post_id)
        try:
            self.db.add(like)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise errors.conflict("post already liked")

        self.posts.adjust_counter(post_id, "likes_count", 1)
        self.notifications.create_like_notification(user_id, post)
        logger.info("Post liked", post_id=str(post_id), user_id=str(user_id))
        return like

    def unlike(self, user_id: uuid.UUID, post_id: uuid.UUID):
        self.posts.get(post_id)
        like = self._active_like(user_id, post_id)
        if not like:
            raise errors.not_found("like")

        like.soft_delete()
        self.db.commit()
        self.posts.adjust_counter(post_id, "likes_count", -1)
        logger.info("Post unliked", post_id=str(post_id), user_id=str(user_id))

    def is_liked(self, user_id: uuid.UUID, post_id: uuid.UUID) -> bool:
        return self._active_like(user_id, post_id) is not None

    def post_likers(
        self, post_id: uuid.UUID, viewer_id: Optional[uuid.UUID], limit: int, offset: int
    ) -> Tuple[List[User], int]:
        """Users who liked the post, most recent like first."""
        self.posts.get_visible(post_id, viewer_id)
        query = (
            self.db.query(User)
            .join(Like, Like.user_id == User.id)
            .filter(
                Like.post_id == post_id,
                Like.deleted_at.is_(None),
                User.deleted_at.is_(None),
            )
        )
        total = query.count()
        users = query.order_by(Like.created_at.desc()).offset(offset).limit(limit).all()
        return users, total

    def user_likes(
        self, user_id: uuid.UUID, viewer_id: Optional[uuid.UUID], limit: int, offset: int
    ) -> Tuple[List[PostWithDetails], int]:
        """Posts the user liked, most recent like first, annotated for the viewer."""
        query = (
            self.posts.live()
            .join(Like, Like.post_id == Post.id)
            .filter(
                Like.user_id == user_id,
                Like.deleted_at.is_(None),
                Post.is_draft.is_(False),
                published_to(viewer_id),
            )
        )
        total = query.count()
        posts = query.order_by(Like.created_at.desc()).offset(offset).limit(limit).all()
        return self.posts.annotate(posts, viewer_id), total
