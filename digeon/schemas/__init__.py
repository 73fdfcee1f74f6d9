from .auth import RegisterRequest, LoginRequest, RefreshRequest, TokenResponse
from .users import ProfileUpdate
from .posts import PostCreate, PostUpdate
from .comments import CommentCreate, CommentUpdate

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "RefreshRequest",
    "TokenResponse",
    "ProfileUpdate",
    "PostCreate",
    "PostUpdate",
    "CommentCreate",
    "CommentUpdate",
]
