"""
Comments as reply posts.

A comment on a post is a ``reply`` whose parent is the post; a reply to a
comment is a ``reply`` whose parent is that comment. Nothing is stored
beyond ordinary Post rows.
"""
import uuid
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from .. import errors
from ..models.post import Post, PostType
from .posts import PostService, PostWithDetails, check_content, is_visible, published_to

# Guards the walk up a reply chain against malformed data
MAX_THREAD_DEPTH = 1000


@dataclass
class CommentView:
    """A reply post seen as a comment."""
    post: Post
    root_post_id: uuid.UUID
    is_liked: bool = False


class CommentService:
    def __init__(self, db: Session, posts: Optional[PostService] = None):
        self.db = db
        self.posts = posts or PostService(db)
        self.notifications = self.posts.notifications

    def root_post_id(self, post: Post) -> uuid.UUID:
        """Id of the first non-reply ancestor the thread answers."""
        current = post
        for _ in range(MAX_THREAD_DEPTH):
            if current.type is not PostType.REPLY or current.parent_post_id is None:
                return current.id
            parent = self.db.get(Post, current.parent_post_id)
            if parent is None:
                return current.parent_post_id
            current = parent
        return current.id

    def _view(self, details: PostWithDetails) -> CommentView:
        return CommentView(details.post, self.root_post_id(details.post), details.is_liked)

    def get_comment(self, comment_id: uuid.UUID, viewer_id: Optional[uuid.UUID] = None) -> Post:
        comment = self.posts.get(comment_id, "comment")
        if comment.type is not PostType.REPLY or not is_visible(comment, viewer_id):
            raise errors.not_found("comment")
        return comment

    def _require_content(self, content: str) -> str:
        if not (content or "").strip():
            raise errors.validation_error("content is required")
        return check_content(content)

    def create_comment(self, user_id: uuid.UUID, post_id: uuid.UUID, content: str) -> CommentView:
        content = self._require_content(content)
        target = self.posts.get_visible(post_id, user_id)

        details = self.posts.create(
            user_id, content, PostType.REPLY.value, parent_post_id=target.id
        )
        self.notifications.create_comment_notification(user_id, target)
        return self._view(details)

    def create_reply(self, user_id: uuid.UUID, comment_id: uuid.UUID, content: str) -> CommentView:
        content = self._require_content(content)
        comment = self.get_comment(comment_id, user_id)

        details = self.posts.create(
            user_id, content, PostType.REPLY.value, parent_post_id=comment.id
        )
        self.notifications.create_comment_notification(user_id, comment)
        return self._view(details)

    def _children(
        self, parent_id: uuid.UUID, viewer_id: Optional[uuid.UUID], limit: int, offset: int
    ) -> Tuple[List[CommentView], int]:
        query = self.posts.live().filter(
            Post.parent_post_id == parent_id,
            Post.type == PostType.REPLY,
            Post.is_draft.is_(False),
            published_to(viewer_id),
        )
        total = query.count()
        replies = query.order_by(Post.created_at.asc()).offset(offset).limit(limit).all()
        return [self._view(d) for d in self.posts.annotate(replies, viewer_id)], total

    def list_comments(self, post_id: uuid.UUID, viewer_id: Optional[uuid.UUID], limit: int, offset: int):
        self.posts.get_visible(post_id, viewer_id)
        return self._children(post_id, viewer_id, limit, offset)

    def list_replies(self, comment_id: uuid.UUID, viewer_id: Optional[uuid.UUID], limit: int, offset: int):
        self.get_comment(comment_id, viewer_id)
        return self._children(comment_id, viewer_id, limit, offset)

    def update_comment(self, comment_id: uuid.UUID, user_id: uuid.UUID, content: str) -> CommentView:
        self.get_comment(comment_id, user_id)
        content = self._require_content(content)
        return self._view(self.posts.update(comment_id, user_id, content, resource="comment"))

    def delete_comment(self, comment_id: uuid.UUID, user_id: uuid.UUID):
        self.get_comment(comment_id, user_id)
        self.posts.delete(comment_id, user_id, resource="comment")
