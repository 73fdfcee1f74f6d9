from .users import UserService
from .posts import PostService, PostWithDetails
from .comments import CommentService, CommentView
from .likes import LikeService
from .follows import FollowService
from .notifications import NotificationService
from .media import MediaService
from .timeline import TimelineService, TimelinePage
from .search import SearchService, SearchResults

__all__ = [
    "UserService",
    "PostService",
    "PostWithDetails",
    "CommentService",
    "CommentView",
    "LikeService",
    "FollowService",
    "NotificationService",
    "MediaService",
    "TimelineService",
    "TimelinePage",
    "SearchService",
    "SearchResults",
]
