from .user import User
from .post import Post, PostType, Hashtag, post_hashtags
from .like import Like
from .follow import Follow
from .notification import Notification, NotificationType
from .media import Media, MediaType

__all__ = [
    "User",
    "Post",
    "PostType",
    "Hashtag",
    "post_hashtags",
    "Like",
    "Follow",
    "Notification",
    "NotificationType",
    "Media",
    "MediaType",
]
