"""
Authentication routes for register, login, and token management.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from ..auth import create_tokens, get_required_user, refresh_access_token
from ..config import get_settings
from ..database import get_db
from ..dependencies import get_user_service
from ..limiter import limiter
from ..models.user import User
from ..responses import message
from ..schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, TokenResponse
from ..serializers import user_private
from ..services.users import UserService

settings = get_settings()

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(user: User, users: UserService) -> dict:
    access_token, refresh_token = create_tokens(user)
    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
        "user": user_private(user, users.counts(user.id)),
    }


@router.post("/register", status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.register_rate_limit)
def register(request: Request, body: RegisterRequest, users: UserService = Depends(get_user_service)):
    """Register a new account and return tokens for it."""
    user = users.register(body.username, body.email, body.password, body.display_name)
    return _auth_response(user, users)


@router.post("/login")
@limiter.limit(settings.login_rate_limit)
def login(request: Request, body: LoginRequest, users: UserService = Depends(get_user_service)):
    """Login with username or email and password."""
    user = users.authenticate(body.login, body.password)
    return _auth_response(user, users)


@router.post("/refresh", response_model=TokenResponse)
@limiter.limit(settings.refresh_rate_limit)
def refresh_tokens(request: Request, body: RefreshRequest, db: Session = Depends(get_db)):
    """Get new access and refresh tokens using a valid refresh token."""
    tokens = refresh_access_token(body.refresh_token, db)
    if not tokens:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )

    access_token, refresh_token = tokens
    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


@router.get("/me")
def get_me(
    current_user: User = Depends(get_required_user),
    users: UserService = Depends(get_user_service),
):
    """Get current authenticated user."""
    return user_private(current_user, users.counts(current_user.id))


@router.post("/logout")
def logout(current_user: User = Depends(get_required_user)):
    """
    Logout the current user.

    Tokens are stateless; the client discards them.
    """
    return message("logged out successfully")
