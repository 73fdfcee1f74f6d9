"""
Follow model: a directed edge follower -> following.
"""
from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Uuid, text
from sqlalchemy.orm import relationship

from ..database import Base
from .mixins import SoftDeleteMixin, TimestampMixin


class Follow(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "follows"
    __table_args__ = (
        CheckConstraint("follower_id != following_id", name="ck_follows_not_self"),
        Index(
            "ux_follows_follower_following",
            "follower_id",
            "following_id",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    follower_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    following_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)

    follower = relationship("User", foreign_keys=[follower_id])
    following = relationship("User", foreign_keys=[following_id])
