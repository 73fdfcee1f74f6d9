"""
Post creation, lookup, editing and deletion.

Denormalized counters (likes, reposts, comments) live on the post row and
are adjusted with single UPDATE statements after the owning write commits.
"""
import uuid
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from .. import errors
from ..logging_config import get_logger
from ..models.like import Like
from ..models.post import MAX_CONTENT_LENGTH, Post, PostType
from .hashtags import HashtagService
from .media import MediaService
from .notifications import NotificationService

logger = get_logger("posts")

COUNTERS = ("likes_count", "reposts_count", "comments_count", "views_count")


@dataclass
class PostWithDetails:
    """A post plus the viewer-relative flags shown with it."""
    post: Post
    is_liked: bool = False
    is_reposted: bool = False


def check_content(content: str) -> str:
    content = content or ""
    if len(content) > MAX_CONTENT_LENGTH:
        raise errors.validation_error(f"content must be at most {MAX_CONTENT_LENGTH} characters")
    return content


def is_visible(post: Post, viewer_id: Optional[uuid.UUID]) -> bool:
    """Drafts and private posts are seen by their author only."""
    if post.author_id == viewer_id:
        return True
    return not post.is_draft and post.is_public


def published_to(viewer_id: Optional[uuid.UUID]):
    """Filter for public posts plus the viewer's own private ones."""
    if viewer_id is None:
        return Post.is_public.is_(True)
    return or_(Post.is_public.is_(True), Post.author_id == viewer_id)


class PostService:
    def __init__(self, db: Session, notifications: Optional[NotificationService] = None):
        self.db = db
        self.notifications = notifications or NotificationService(db)
        self.hashtags = HashtagService(db)
        self.media = MediaService(db)

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    def live(self):
        """Non-deleted posts with author, media and referenced posts preloaded."""
        return self.db.query(Post).filter(Post.deleted_at.is_(None)).options(
            selectinload(Post.author),
            selectinload(Post.media),
            selectinload(Post.hashtags),
            selectinload(Post.original_post).selectinload(Post.author),
            selectinload(Post.parent_post).selectinload(Post.author),
        )

    def get(self, post_id: uuid.UUID, resource: str = "post") -> Post:
        post = self.live().filter(Post.id == post_id).first()
        if not post:
            raise errors.not_found(resource)
        return post

    def get_visible(self, post_id: uuid.UUID, viewer_id: Optional[uuid.UUID], resource: str = "post") -> Post:
        """Like ``get``, but another user's draft or private post is not found."""
        post = self.get(post_id, resource)
        if not is_visible(post, viewer_id):
            raise errors.not_found(resource)
        return post

    def get_with_details(self, post_id: uuid.UUID, viewer_id: Optional[uuid.UUID] = None) -> PostWithDetails:
        post = self.get_visible(post_id, viewer_id)
        return self.annotate([post], viewer_id)[0]

    def list_by_author(
        self, author_id: uuid.UUID, viewer_id: Optional[uuid.UUID], limit: int, offset: int
    ) -> Tuple[List[PostWithDetails], int]:
        query = self.live().filter(
            Post.author_id == author_id,
            Post.is_draft.is_(False),
            published_to(viewer_id),
        )
        total = query.count()
        posts = query.order_by(Post.created_at.desc()).offset(offset).limit(limit).all()
        return self.annotate(posts, viewer_id), total

    def annotate(self, posts: Sequence[Post], viewer_id: Optional[uuid.UUID]) -> List[PostWithDetails]:
        """Attach is_liked / is_reposted for ``viewer_id`` with one query per flag."""
        if not viewer_id or not posts:
            return [PostWithDetails(post) for post in posts]

        ids = [post.id for post in posts]
        liked = {
            row[0] for row in self.db.query(Like.post_id).filter(
                Like.user_id == viewer_id,
                Like.post_id.in_(ids),
                Like.deleted_at.is_(None),
            )
        }
        reposted = {
            row[0] for row in self.db.query(Post.original_post_id).filter(
                Post.author_id == viewer_id,
                Post.type == PostType.REPOST,
                Post.original_post_id.in_(ids),
                Post.deleted_at.is_(None),
            )
        }
        return [PostWithDetails(post, post.id in liked, post.id in reposted) for post in posts]

    # ------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------

    def adjust_counter(self, post_id: uuid.UUID, counter: str, delta: int):
        """Add ``delta`` to a counter column in one statement, never below zero."""
        if counter not in COUNTERS:
            raise ValueError(f"unknown counter {counter}")
        column = getattr(Post, counter)
        query = self.db.query(Post).filter(Post.id == post_id)
        if delta < 0:
            query = query.filter(column >= -delta)
        query.update({column: column + delta}, synchronize_session=False)
        self.db.commit()

    def create(
        self,
        author_id: uuid.UUID,
        content: str,
        post_type: str = PostType.ORIGINAL.value,
        original_post_id: Optional[uuid.UUID] = None,
        parent_post_id: Optional[uuid.UUID] = None,
        media_ids: Iterable[uuid.UUID] = (),
        media_urls: Iterable[str] = (),
        is_draft: bool = False,
        is_public: bool = True,
    ) -> PostWithDetails:
        content = check_content(content)
        try:
            kind = PostType(post_type)
        except ValueError:
            raise errors.validation_error(f"invalid post type: {post_type}")

        if kind.requires_original and not original_post_id:
            raise errors.validation_error(f"{kind.value} requires original_post_id")
        if not kind.requires_original and original_post_id:
            raise errors.validation_error(f"{kind.value} posts cannot set original_post_id")
        if kind.requires_parent and not parent_post_id:
            raise errors.validation_error("reply requires parent_post_id")
        if not kind.requires_parent and parent_post_id:
            raise errors.validation_error(f"{kind.value} posts cannot set parent_post_id")

        original = self.get_visible(original_post_id, author_id, "original post") if original_post_id else None
        parent = self.get_visible(parent_post_id, author_id, "parent post") if parent_post_id else None

        post = Post(
            author_id=author_id,
            content=content,
            type=kind,
            original_post_id=original_post_id,
            parent_post_id=parent_post_id,
            is_draft=is_draft,
            is_public=is_public,
        )
        self.db.add(post)
        self.db.flush()

        self.hashtags.set_post_hashtags(post, content)
        self.media.attach_to_post(post.id, author_id, media_ids=media_ids, media_urls=media_urls)
        self.db.commit()

        if parent:
            self.adjust_counter(parent.id, "comments_count", 1)
        if kind is PostType.REPOST:
            self.adjust_counter(original.id, "reposts_count", 1)
            self.notifications.create_repost_notification(author_id, original)
        elif kind is PostType.QUOTE:
            self.notifications.create_quote_notification(author_id, original)

        logger.info("Post created", post_id=str(post.id), author_id=str(author_id), type=kind.value)
        return self.get_with_details(post.id, author_id)

    def _owned(self, post_id: uuid.UUID, author_id: uuid.UUID, resource: str = "post") -> Post:
        post = self.get(post_id, resource)
        if post.author_id != author_id:
            raise errors.forbidden(f"you can only modify your own {resource}s")
        return post

    def update(self, post_id: uuid.UUID, author_id: uuid.UUID, content: str, resource: str = "post") -> PostWithDetails:
        post = self._owned(post_id, author_id, resource)
        content = check_content(content)

        post.content = content
        self.hashtags.set_post_hashtags(post, content)
        self.db.commit()

        logger.info("Post updated", post_id=str(post_id))
        return self.get_with_details(post_id, author_id)

    def delete(self, post_id: uuid.UUID, author_id: uuid.UUID, resource: str = "post"):
        post = self._owned(post_id, author_id, resource)
        post.soft_delete()
        self.db.commit()

        if post.type is PostType.REPLY and post.parent_post_id:
            self.adjust_counter(post.parent_post_id, "comments_count", -1)
        if post.type is PostType.REPOST and post.original_post_id:
            self.adjust_counter(post.original_post_id, "reposts_count", -1)

        logger.info("Post deleted", post_id=str(post_id), author_id=str(author_id))
