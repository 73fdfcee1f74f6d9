"""
User model for accounts and profiles.
"""
from sqlalchemy import Boolean, CheckConstraint, Column, String
from sqlalchemy.orm import relationship

from ..database import Base
from .mixins import SoftDeleteMixin, TimestampMixin


class User(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("length(username) >= 3", name="ck_users_username_length"),
    )

    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    display_name = Column(String(100))
    bio = Column(String(280), default="")
    profile_image_url = Column(String(500), default="")
    cover_image_url = Column(String(500), default="")
    location = Column(String(100), default="")
    website = Column(String(200), default="")
    is_verified = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    posts = relationship("Post", back_populates="author", foreign_keys="Post.author_id")

    # Profile fields a user may change about themselves
    EDITABLE_FIELDS = (
        "display_name",
        "bio",
        "location",
        "website",
        "profile_image_url",
        "cover_image_url",
    )

    def __repr__(self):
        return f"<User {self.username}>"
