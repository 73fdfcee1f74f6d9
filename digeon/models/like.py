"""
Like model: one live row per (user, post).
"""
from sqlalchemy import Column, ForeignKey, Index, Uuid, text
from sqlalchemy.orm import relationship

from ..database import Base
from .mixins import SoftDeleteMixin, TimestampMixin


class Like(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "likes"
    __table_args__ = (
        Index(
            "ux_likes_user_post",
            "user_id",
            "post_id",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    post_id = Column(Uuid, ForeignKey("posts.id"), nullable=False, index=True)

    user = relationship("User")
    post = relationship("Post")
