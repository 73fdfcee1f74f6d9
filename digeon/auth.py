"""
Authentication utilities for JWT tokens and password hashing.
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from .config import get_settings
from .database import get_db
from .models.user import User

settings = get_settings()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


def _encode(data: dict, token_type: str, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta, "type": token_type})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    return _encode(data, "access", expires_delta or timedelta(minutes=settings.access_token_expire_minutes))


def create_refresh_token(data: dict) -> str:
    """Create a JWT refresh token with longer expiration."""
    return _encode(data, "refresh", timedelta(days=settings.refresh_token_expire_days))


def create_tokens(user: User) -> Tuple[str, str]:
    """Create both access and refresh tokens for a user."""
    data = {"sub": str(user.id), "username": user.username}
    return create_access_token(data), create_refresh_token(data)


def verify_token(token: str, expected_type: str = "access") -> Optional[dict]:
    """Verify a JWT token and return its payload."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    if payload.get("type", "access") != expected_type:
        return None
    return payload


def _user_from_payload(payload: Optional[dict], db: Session) -> Optional[User]:
    if not payload:
        return None
    try:
        user_id = uuid.UUID(str(payload.get("sub")))
    except (ValueError, TypeError):
        return None

    return db.query(User).filter(
        User.id == user_id,
        User.deleted_at.is_(None),
        User.is_active.is_(True),
    ).first()


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Get the current user from the JWT token (optional auth)."""
    if not token:
        return None
    return _user_from_payload(verify_token(token, "access"), db)


def get_required_user(
    current_user: Optional[User] = Depends(get_current_user)
) -> User:
    """Get the current user, raising 401 if not authenticated."""
    if not current_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


def refresh_access_token(refresh_token: str, db: Session) -> Optional[Tuple[str, str]]:
    """Use a refresh token to get new access and refresh tokens."""
    user = _user_from_payload(verify_token(refresh_token, "refresh"), db)
    if not user:
        return None
    return create_tokens(user)
