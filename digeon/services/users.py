"""
Account registration, login and profiles.
"""
import uuid
from typing import Dict, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import errors
from ..auth import get_password_hash, verify_password
from ..logging_config import get_logger
from ..models.post import Post
from ..models.user import User
from .follows import FollowService

logger = get_logger("users")

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8

# Column sizes for the editable profile fields
PROFILE_FIELD_LIMITS = {
    "display_name": 100,
    "bio": 280,
    "location": 100,
    "website": 200,
    "profile_image_url": 500,
    "cover_image_url": 500,
}


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def _live(self):
        return self.db.query(User).filter(User.deleted_at.is_(None))

    def register(self, username: str, email: str, password: str, display_name: Optional[str] = None) -> User:
        username = (username or "").strip()
        email = (email or "").strip()

        if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
            raise errors.validation_error(
                f"username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters"
            )
        if "@" not in email:
            raise errors.validation_error("invalid email address")
        if len(password or "") < PASSWORD_MIN_LENGTH:
            raise errors.validation_error(f"password must be at least {PASSWORD_MIN_LENGTH} characters")

        existing = self._live().filter(or_(User.username == username, User.email == email)).first()
        if existing:
            raise errors.conflict("user already exists")

        user = User(
            username=username,
            email=email,
            password_hash=get_password_hash(password),
            display_name=(display_name or "").strip() or username,
        )
        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise errors.conflict("user already exists")
        self.db.refresh(user)

        logger.info("User registered", user_id=str(user.id), username=user.username)
        return user

    def authenticate(self, login: str, password: str) -> User:
        """Resolve ``login`` (username or email) and check the password."""
        login = (login or "").strip()
        user = self._live().filter(or_(User.username == login, User.email == login)).first()
        if not user or not verify_password(password or "", user.password_hash):
            raise errors.unauthorized("invalid credentials")
        if not user.is_active:
            raise errors.unauthorized("account is deactivated")
        return user

    def get(self, user_id: uuid.UUID) -> User:
        user = self._live().filter(User.id == user_id).first()
        if not user:
            raise errors.not_found("user")
        return user

    def get_by_username(self, username: str) -> User:
        user = self._live().filter(User.username == username).first()
        if not user:
            raise errors.not_found("user")
        return user

    def counts(self, user_id: uuid.UUID) -> Dict[str, int]:
        """Follow counts plus published public posts."""
        counts = FollowService(self.db).counts(user_id)
        counts["posts_count"] = self.db.query(Post).filter(
            Post.author_id == user_id,
            Post.deleted_at.is_(None),
            Post.is_draft.is_(False),
            Post.is_public.is_(True),
        ).count()
        return counts

    def update_profile(self, user: User, changes: Dict) -> User:
        """Apply the editable profile fields present in ``changes``."""
        updates = {
            key: str(value).strip() for key, value in changes.items()
            if key in User.EDITABLE_FIELDS and value is not None
        }
        if not updates:
            raise errors.validation_error("no valid fields to update")

        for key, value in updates.items():
            if len(value) > PROFILE_FIELD_LIMITS[key]:
                raise errors.validation_error(f"{key} must be at most {PROFILE_FIELD_LIMITS[key]} characters")

        for key, value in updates.items():
            setattr(user, key, value)

        self.db.commit()
        self.db.refresh(user)
        logger.info("Profile updated", user_id=str(user.id), fields=sorted(updates))
        return user
