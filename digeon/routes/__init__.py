from .auth import router as auth_router
from .follows import router as follows_router
from .users import router as users_router
from .posts import router as posts_router
from .likes import router as likes_router
from .comments import router as comments_router
from .timeline import router as timeline_router
from .search import router as search_router
from .notifications import router as notifications_router
from .media import router as media_router
from .health import router as health_router

__all__ = [
    "auth_router",
    "follows_router",
    "users_router",
    "posts_router",
    "likes_router",
    "comments_router",
    "timeline_router",
    "search_router",
    "notifications_router",
    "media_router",
    "health_router",
]
