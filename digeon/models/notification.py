"""
Notification model for actor-triggered events.
"""
import enum

from sqlalchemy import Boolean, Column, Enum, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import relationship

from ..database import Base
from .mixins import SoftDeleteMixin, TimestampMixin


class NotificationType(str, enum.Enum):
    FOLLOW = "follow"
    LIKE = "like"
    COMMENT = "comment"
    REPOST = "repost"
    QUOTE = "quote"
    MENTION = "mention"


class Notification(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_user_created", "user_id", "created_at"),
        Index("ix_notifications_user_read", "user_id", "is_read"),
    )

    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    actor_id = Column(Uuid, ForeignKey("users.id"), nullable=False)
    type = Column(
        Enum(NotificationType, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    post_id = Column(Uuid, ForeignKey("posts.id"), nullable=True)
    message = Column(String(500), nullable=False, default="")
    is_read = Column(Boolean, default=False, nullable=False)

    user = relationship("User", foreign_keys=[user_id])
    actor = relationship("User", foreign_keys=[actor_id])
    post = relationship("Post")
