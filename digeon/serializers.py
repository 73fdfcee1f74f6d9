"""
Model-to-dict conversion shared by the route modules.
"""
from typing import Dict, Optional

from .models.notification import Notification
from .models.post import Hashtag, Post
from .models.user import User
from .services.comments import CommentView
from .services.posts import PostWithDetails
from .services.timeline import TimelinePage


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


def user_public(user: Optional[User], counts: Optional[Dict[str, int]] = None) -> Optional[Dict]:
    """Public profile; never includes email or password hash."""
    if user is None:
        return None
    data = {
        "id": str(user.id),
        "username": user.username,
        "display_name": user.display_name,
        "bio": user.bio or "",
        "profile_image_url": user.profile_image_url or "",
        "cover_image_url": user.cover_image_url or "",
        "location": user.location or "",
        "website": user.website or "",
        "is_verified": bool(user.is_verified),
        "created_at": _iso(user.created_at),
    }
    if counts is not None:
        data.update(counts)
    return data


def user_private(user: User, counts: Optional[Dict[str, int]] = None) -> Dict:
    """Profile as seen by its owner."""
    data = user_public(user, counts)
    data["email"] = user.email
    data["is_active"] = bool(user.is_active)
    return data


def _referenced_post(post: Optional[Post]) -> Optional[Dict]:
    if post is None or post.is_deleted:
        return None
    return {
        "id": str(post.id),
        "content": post.content,
        "type": post.type.value,
        "author": user_public(post.author),
        "created_at": _iso(post.created_at),
    }


def post_to_dict(post: Post, is_liked: bool = False, is_reposted: bool = False) -> Dict:
    return {
        "id": str(post.id),
        "author_id": str(post.author_id),
        "author": user_public(post.author),
        "content": post.content,
        "type": post.type.value,
        "is_public": post.is_public,
        "is_draft": post.is_draft,
        "original_post_id": str(post.original_post_id) if post.original_post_id else None,
        "parent_post_id": str(post.parent_post_id) if post.parent_post_id else None,
        "original_post": _referenced_post(post.original_post),
        "parent_post": _referenced_post(post.parent_post),
        "likes_count": post.likes_count,
        "reposts_count": post.reposts_count,
        "comments_count": post.comments_count,
        "views_count": post.views_count,
        "hashtags": [hashtag.name for hashtag in post.hashtags],
        "media": [media.to_dict() for media in post.media],
        "is_liked": is_liked,
        "is_reposted": is_reposted,
        "created_at": _iso(post.created_at),
        "updated_at": _iso(post.updated_at),
    }


def details_to_dict(details: PostWithDetails) -> Dict:
    return post_to_dict(details.post, details.is_liked, details.is_reposted)


def comment_to_dict(view: CommentView) -> Dict:
    post = view.post
    return {
        "id": str(post.id),
        "user_id": str(post.author_id),
        "post_id": str(view.root_post_id),
        "parent_id": str(post.parent_post_id) if post.parent_post_id else None,
        "content": post.content,
        "likes_count": post.likes_count,
        "replies_count": post.comments_count,
        "created_at": _iso(post.created_at),
        "updated_at": _iso(post.updated_at),
        "user": user_public(post.author),
        "is_liked": view.is_liked,
    }


def timeline_to_dict(page: TimelinePage) -> Dict:
    return {
        "posts": [details_to_dict(d) for d in page.posts],
        "limit": page.limit,
        "offset": page.offset,
        "total": page.total,
    }


def hashtag_to_dict(hashtag: Hashtag, post_count: Optional[int] = None) -> Dict:
    data = hashtag.to_dict()
    if post_count is not None:
        data["post_count"] = post_count
    return data


def notification_to_dict(notification: Notification) -> Dict:
    post = notification.post
    return {
        "id": str(notification.id),
        "type": notification.type.value,
        "message": notification.message,
        "is_read": notification.is_read,
        "actor": user_public(notification.actor),
        "post_id": str(notification.post_id) if notification.post_id else None,
        "post": post_to_dict(post) if post is not None and not post.is_deleted else None,
        "created_at": _iso(notification.created_at),
    }
