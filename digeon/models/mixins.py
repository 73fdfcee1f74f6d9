"""
Column mixins shared by the persisted entities.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Uuid


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class SoftDeleteMixin:
    """Rows are hidden, never removed; every read filters ``deleted_at IS NULL``."""

    deleted_at = Column(DateTime, nullable=True, index=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self):
        self.deleted_at = utcnow()
