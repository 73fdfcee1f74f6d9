"""
Follow graph operations.
"""
import uuid
from typing import Dict, List, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import errors
from ..logging_config import get_logger
from ..models.follow import Follow
from ..models.user import User
from .notifications import NotificationService

logger = get_logger("follows")


class FollowService:
    def __init__(self, db: Session):
        self.db = db
        self.notifications = NotificationService(db)

    def _edge(self, follower_id: uuid.UUID, following_id: uuid.UUID):
        return self.db.query(Follow).filter(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id,
            Follow.deleted_at.is_(None),
        ).first()

    def _require_user(self, user_id: uuid.UUID) -> User:
        user = self.db.query(User).filter(User.id == user_id, User.deleted_at.is_(None)).first()
        if not user:
            raise errors.not_found("user")
        return user

    def follow(self, follower_id: uuid.UUID, following_id: uuid.UUID) -> Follow:
        if follower_id == following_id:
            raise errors.validation_error("cannot follow yourself")
        self._require_user(following_id)
        if self._edge(follower_id, following_id):
            raise errors.conflict("already following this user")

        follow = Follow(follower_id=follower_id, following_id=following_id)
        try:
            self.db.add(follow)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise errors.conflict("already following this user")

        self.notifications.create_follow_notification(follower_id, following_id)
        logger.info("User followed", follower_id=str(follower_id), following_id=str(following_id))
        return follow

    def unfollow(self, follower_id: uuid.UUID, following_id: uuid.UUID):
        if follower_id == following_id:
            raise errors.validation_error("cannot unfollow yourself")
        follow = self._edge(follower_id, following_id)
        if not follow:
            raise errors.not_found("follow relationship")

        follow.soft_delete()
        self.db.commit()
        logger.info("User unfollowed", follower_id=str(follower_id), following_id=str(following_id))

    def is_following(self, follower_id: uuid.UUID, following_id: uuid.UUID) -> bool:
        return self._edge(follower_id, following_id) is not None

    def _users_via(self, join_on, match, user_id: uuid.UUID, limit: int, offset: int) -> Tuple[List[User], int]:
        self._require_user(user_id)
        query = (
            self.db.query(User)
            .join(Follow, join_on == User.id)
            .filter(match == user_id, Follow.deleted_at.is_(None), User.deleted_at.is_(None))
        )
        total = query.count()
        users = query.order_by(Follow.created_at.desc()).offset(offset).limit(limit).all()
        return users, total

    def followers(self, user_id: uuid.UUID, limit: int, offset: int) -> Tuple[List[User], int]:
        return self._users_via(Follow.follower_id, Follow.following_id, user_id, limit, offset)

    def following(self, user_id: uuid.UUID, limit: int, offset: int) -> Tuple[List[User], int]:
        return self._users_via(Follow.following_id, Follow.follower_id, user_id, limit, offset)

    def counts(self, user_id: uuid.UUID) -> Dict[str, int]:
        self._require_user(user_id)
        live = self.db.query(Follow).filter(Follow.deleted_at.is_(None))
        return {
            "followers_count": live.filter(Follow.following_id == user_id).count(),
            "following_count": live.filter(Follow.follower_id == user_id).count(),
        }

    def suggested(self, user_id: uuid.UUID, limit: int) -> List[User]:
        """Active users the caller does not follow yet, newest accounts first."""
        followed = select(Follow.following_id).where(
            Follow.follower_id == user_id,
            Follow.deleted_at.is_(None),
        )
        return (
            self.db.query(User)
            .filter(
                User.deleted_at.is_(None),
                User.is_active.is_(True),
                User.id != user_id,
                User.id.not_in(followed),
            )
            .order_by(User.created_at.desc())
            .limit(limit)
            .all()
        )
