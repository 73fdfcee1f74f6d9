"""
Post and hashtag models.

Comments are not a separate table: a comment is a Post of type ``reply``
whose ``parent_post_id`` points at the post (or comment) it answers.
"""
import enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Uuid,
)
from sqlalchemy.orm import relationship

from ..database import Base
from .mixins import SoftDeleteMixin, TimestampMixin

MAX_CONTENT_LENGTH = 280


class PostType(str, enum.Enum):
    ORIGINAL = "original"
    REPLY = "reply"
    REPOST = "repost"
    QUOTE = "quote"

    @property
    def requires_original(self) -> bool:
        return self in (PostType.REPOST, PostType.QUOTE)

    @property
    def requires_parent(self) -> bool:
        return self is PostType.REPLY


post_hashtags = Table(
    "post_hashtags",
    Base.metadata,
    Column("post_id", Uuid, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("hashtag_id", Uuid, ForeignKey("hashtags.id", ondelete="CASCADE"), primary_key=True),
)


class Post(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint(f"length(content) <= {MAX_CONTENT_LENGTH}", name="ck_posts_content_length"),
        CheckConstraint("id != original_post_id", name="ck_posts_not_self_original"),
        CheckConstraint("id != parent_post_id", name="ck_posts_not_self_parent"),
        Index("ix_posts_author_created", "author_id", "created_at"),
    )

    author_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(String(MAX_CONTENT_LENGTH), nullable=False, default="")
    type = Column(
        Enum(PostType, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=PostType.ORIGINAL,
        index=True,
    )
    is_public = Column(Boolean, default=True, nullable=False)
    is_draft = Column(Boolean, default=False, nullable=False)
    original_post_id = Column(Uuid, ForeignKey("posts.id"), nullable=True, index=True)
    parent_post_id = Column(Uuid, ForeignKey("posts.id"), nullable=True, index=True)

    likes_count = Column(Integer, default=0, nullable=False)
    reposts_count = Column(Integer, default=0, nullable=False)
    comments_count = Column(Integer, default=0, nullable=False)
    views_count = Column(Integer, default=0, nullable=False)

    # Relationships
    author = relationship("User", back_populates="posts", foreign_keys=[author_id])
    original_post = relationship("Post", remote_side="Post.id", foreign_keys=[original_post_id])
    parent_post = relationship("Post", remote_side="Post.id", foreign_keys=[parent_post_id])
    hashtags = relationship("Hashtag", secondary=post_hashtags, back_populates="posts")
    media = relationship(
        "Media",
        primaryjoin="and_(Post.id == Media.post_id, Media.deleted_at.is_(None))",
        order_by="Media.order",
        viewonly=True,
    )

    def __repr__(self):
        return f"<Post {self.id} {self.type.value if self.type else None}>"


class Hashtag(TimestampMixin, Base):
    __tablename__ = "hashtags"

    name = Column(String(100), unique=True, index=True, nullable=False)

    posts = relationship("Post", secondary=post_hashtags, back_populates="hashtags")

    def to_dict(self):
        return {
            "id": str(self.id),
            "name": self.name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
