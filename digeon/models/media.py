"""
Media model for uploaded files.
"""
import enum

from sqlalchemy import BigInteger, CheckConstraint, Column, Enum, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import relationship

from ..database import Base
from .mixins import SoftDeleteMixin, TimestampMixin


class MediaType(str, enum.Enum):
    IMAGE = "image"
    VIDEO = "video"
    GIF = "gif"


class Media(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "media"
    __table_args__ = (
        CheckConstraint("file_size >= 0", name="ck_media_file_size"),
        CheckConstraint("width >= 0 AND height >= 0", name="ck_media_dimensions"),
        Index("ix_media_post_order", "post_id", "order"),
    )

    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    post_id = Column(Uuid, ForeignKey("posts.id"), nullable=True, index=True)
    type = Column(
        Enum(MediaType, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    url = Column(String(500), nullable=False)
    thumbnail_url = Column(String(500), nullable=True)
    file_name = Column(String(255), nullable=False)
    file_size = Column(BigInteger, default=0, nullable=False)
    width = Column(Integer, default=0, nullable=False)
    height = Column(Integer, default=0, nullable=False)
    duration = Column(Integer, default=0, nullable=False)  # seconds
    alt_text = Column(String(500), default="")
    order = Column(Integer, default=0, nullable=False)

    user = relationship("User")
    post = relationship("Post", foreign_keys=[post_id])

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "post_id": str(self.post_id) if self.post_id else None,
            "type": self.type.value,
            "url": self.url,
            "thumbnail_url": self.thumbnail_url,
            "file_name": self.file_name,
            "file_size": self.file_size,
            "width": self.width,
            "height": self.height,
            "duration": self.duration,
            "alt_text": self.alt_text,
            "order": self.order,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
