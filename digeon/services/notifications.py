"""
Notification creation and inbox management.
"""
import uuid
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from .. import errors
from ..logging_config import get_logger
from ..models.mixins import utcnow
from ..models.notification import Notification, NotificationType
from ..models.post import Post

logger = get_logger("notifications")

MESSAGES = {
    NotificationType.FOLLOW: "started following you",
    NotificationType.LIKE: "liked your post",
    NotificationType.COMMENT: "commented on your post",
    NotificationType.REPOST: "reposted your post",
    NotificationType.QUOTE: "quoted your post",
    NotificationType.MENTION: "mentioned you in a post",
}

# Repeating these actions does not produce a second notification
DEDUPLICATED = {NotificationType.FOLLOW, NotificationType.LIKE}


class NotificationService:
    def __init__(self, db: Session):
        self.db = db

    def _live(self):
        return self.db.query(Notification).filter(Notification.deleted_at.is_(None))

    def notify(
        self,
        recipient_id: uuid.UUID,
        actor_id: uuid.UUID,
        kind: NotificationType,
        post_id: Optional[uuid.UUID] = None,
    ) -> Optional[Notification]:
        """Record an event for ``recipient_id``; self-actions are ignored.

        Notifications are a side effect of another write that has already
        been committed, so a failure here is logged and not raised.
        """
        if recipient_id == actor_id:
            return None

        if kind in DEDUPLICATED:
            existing = self._live().filter(
                Notification.user_id == recipient_id,
                Notification.actor_id == actor_id,
                Notification.type == kind,
            )
            if post_id is None:
                existing = existing.filter(Notification.post_id.is_(None))
            else:
                existing = existing.filter(Notification.post_id == post_id)
            if existing.first():
                return None

        notification = Notification(
            user_id=recipient_id,
            actor_id=actor_id,
            type=kind,
            post_id=post_id,
            message=MESSAGES[kind],
        )
        try:
            self.db.add(notification)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to create notification", error=e, type=kind.value, user_id=str(recipient_id))
            return None

        logger.info("Notification created", type=kind.value, user_id=str(recipient_id), actor_id=str(actor_id))
        return notification

    def create_follow_notification(self, follower_id: uuid.UUID, following_id: uuid.UUID):
        return self.notify(following_id, follower_id, NotificationType.FOLLOW)

    def create_like_notification(self, liker_id: uuid.UUID, post: Post):
        return self.notify(post.author_id, liker_id, NotificationType.LIKE, post.id)

    def create_comment_notification(self, commenter_id: uuid.UUID, post: Post):
        return self.notify(post.author_id, commenter_id, NotificationType.COMMENT, post.id)

    def create_repost_notification(self, reposter_id: uuid.UUID, original: Post):
        return self.notify(original.author_id, reposter_id, NotificationType.REPOST, original.id)

    def create_quote_notification(self, quoter_id: uuid.UUID, original: Post):
        return self.notify(original.author_id, quoter_id, NotificationType.QUOTE, original.id)

    # ------------------------------------------------------------
    # Inbox
    # ------------------------------------------------------------

    def list(self, user_id: uuid.UUID, limit: int, offset: int) -> Tuple[List[Notification], int]:
        query = self._live().filter(Notification.user_id == user_id)
        total = query.count()
        items = (
            query.options(selectinload(Notification.actor), selectinload(Notification.post))
            .order_by(Notification.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return items, total

    def unread_count(self, user_id: uuid.UUID) -> int:
        return self._live().filter(
            Notification.user_id == user_id,
            Notification.is_read.is_(False),
        ).count()

    def _owned(self, notification_id: uuid.UUID, user_id: uuid.UUID) -> Notification:
        notification = self._live().filter(Notification.id == notification_id).first()
        if not notification:
            raise errors.not_found("notification")
        if notification.user_id != user_id:
            raise errors.forbidden("notification belongs to another user")
        return notification

    def mark_read(self, notification_id: uuid.UUID, user_id: uuid.UUID) -> Notification:
        notification = self._owned(notification_id, user_id)
        notification.is_read = True
        self.db.commit()
        return notification

    def mark_all_read(self, user_id: uuid.UUID) -> int:
        updated = self._live().filter(
            Notification.user_id == user_id,
            Notification.is_read.is_(False),
        ).update({Notification.is_read: True}, synchronize_session=False)
        self.db.commit()
        return updated

    def delete(self, notification_id: uuid.UUID, user_id: uuid.UUID):
        notification = self._owned(notification_id, user_id)
        notification.soft_delete()
        self.db.commit()

    def delete_all(self, user_id: uuid.UUID) -> int:
        deleted = self._live().filter(Notification.user_id == user_id).update(
            {Notification.deleted_at: utcnow()}, synchronize_session=False
        )
        self.db.commit()
        return deleted
