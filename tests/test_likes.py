"""
Tests for like endpoints.
"""
import uuid

from digeon.models.like import Like
from digeon.models.notification import Notification, NotificationType
from digeon.models.post import Post


def make_post(db, author, content="likeable"):
    post = Post(author_id=author.id, content=content)
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


class TestLikeEndpoints:
    """Test liking and unliking posts."""

    def test_like_then_duplicate(self, client, db, test_user, other_headers):
        """The first like succeeds and the second is a conflict."""
        post = make_post(db, test_user)

        first = client.post(f"/api/posts/{post.id}/like", headers=other_headers)
        assert first.status_code == 200

        second = client.post(f"/api/posts/{post.id}/like", headers=other_headers)
        assert second.status_code == 409
        assert second.json()["error_code"] == "CONFLICT"

        assert client.get(f"/api/posts/{post.id}").json()["likes_count"] == 1

    def test_like_then_unlike_restores_state(self, client, db, test_user, other_user, other_headers):
        post = make_post(db, test_user)

        client.post(f"/api/posts/{post.id}/like", headers=other_headers)
        response = client.delete(f"/api/posts/{post.id}/like", headers=other_headers)
        assert response.status_code == 200

        assert client.get(f"/api/posts/{post.id}").json()["likes_count"] == 0
        live = db.query(Like).filter(
            Like.user_id == other_user.id,
            Like.post_id == post.id,
            Like.deleted_at.is_(None),
        ).count()
        assert live == 0

    def test_relike_after_unlike(self, client, db, test_user, other_headers):
        """A soft-deleted like does not block liking again."""
        post = make_post(db, test_user)
        client.post(f"/api/posts/{post.id}/like", headers=other_headers)
        client.delete(f"/api/posts/{post.id}/like", headers=other_headers)

        response = client.post(f"/api/posts/{post.id}/like", headers=other_headers)
        assert response.status_code == 200
        assert client.get(f"/api/posts/{post.id}").json()["likes_count"] == 1

    def test_unlike_without_like(self, client, db, test_user, other_headers):
        post = make_post(db, test_user)
        response = client.delete(f"/api/posts/{post.id}/like", headers=other_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "like not found"

    def test_like_missing_post(self, client, auth_headers):
        response = client.post(f"/api/posts/{uuid.uuid4()}/like", headers=auth_headers)
        assert response.status_code == 404

    def test_like_notifies_author(self, client, db, test_user, other_user, other_headers):
        post = make_post(db, test_user)
        client.post(f"/api/posts/{post.id}/like", headers=other_headers)

        notification = db.query(Notification).filter(Notification.user_id == test_user.id).one()
        assert notification.type == NotificationType.LIKE
        assert notification.actor_id == other_user.id
        assert notification.message == "liked your post"

    def test_like_notification_not_repeated(self, client, db, test_user, other_headers):
        """Liking, unliking and liking again leaves a single like notification."""
        post = make_post(db, test_user)
        client.post(f"/api/posts/{post.id}/like", headers=other_headers)
        client.delete(f"/api/posts/{post.id}/like", headers=other_headers)
        client.post(f"/api/posts/{post.id}/like", headers=other_headers)

        assert db.query(Notification).filter(Notification.user_id == test_user.id).count() == 1

    def test_self_like_has_no_notification(self, client, db, test_user, auth_headers):
        post = make_post(db, test_user)
        assert client.post(f"/api/posts/{post.id}/like", headers=auth_headers).status_code == 200
        assert db.query(Notification).count() == 0

    def test_like_status(self, client, db, test_user, other_headers):
        post = make_post(db, test_user)
        assert client.get(f"/api/posts/{post.id}/like-status", headers=other_headers).json() == {"is_liked": False}

        client.post(f"/api/posts/{post.id}/like", headers=other_headers)
        assert client.get(f"/api/posts/{post.id}/like-status", headers=other_headers).json() == {"is_liked": True}
        assert client.get(f"/api/posts/{post.id}", headers=other_headers).json()["is_liked"] is True

    def test_post_likers(self, client, db, test_user, other_user, auth_headers, other_headers):
        post = make_post(db, test_user)
        client.post(f"/api/posts/{post.id}/like", headers=other_headers)
        client.post(f"/api/posts/{post.id}/like", headers=auth_headers)

        data = client.get(f"/api/posts/{post.id}/likes").json()
        assert data["total"] == 2
        assert [u["username"] for u in data["users"]] == ["testuser", "otheruser"]

    def test_user_likes(self, client, db, test_user, other_user, other_headers, auth_headers):
        """Posts a user liked, annotated for the viewer."""
        post = make_post(db, test_user)
        client.post(f"/api/posts/{post.id}/like", headers=other_headers)

        data = client.get(f"/api/users/{other_user.id}/likes", headers=auth_headers).json()
        assert data["total"] == 1
        assert data["posts"][0]["id"] == str(post.id)
        assert data["posts"][0]["is_liked"] is False

        data = client.get(f"/api/users/{other_user.id}/likes", headers=other_headers).json()
        assert data["posts"][0]["is_liked"] is True

    def test_cannot_like_hidden_posts(self, client, db, test_user, other_headers):
        """Another user's private post or draft cannot be liked."""
        private = Post(author_id=test_user.id, content="secret", is_public=False)
        draft = Post(author_id=test_user.id, content="unfinished", is_draft=True)
        db.add_all([private, draft])
        db.commit()

        assert client.post(f"/api/posts/{private.id}/like", headers=other_headers).status_code == 404
        assert client.post(f"/api/posts/{draft.id}/like", headers=other_headers).status_code == 404
        assert db.query(Like).count() == 0
        assert client.get(f"/api/posts/{private.id}/likes", headers=other_headers).status_code == 404

    def test_user_likes_hide_private_posts(self, client, db, test_user, other_user, auth_headers, other_headers):
        """The author can like their own private post; other viewers do not see it listed."""
        private = Post(author_id=test_user.id, content="secret", is_public=False)
        db.add(private)
        db.commit()
        assert client.post(f"/api/posts/{private.id}/like", headers=auth_headers).status_code == 200

        assert client.get(f"/api/users/{test_user.id}/likes", headers=other_headers).json()["total"] == 0
        assert client.get(f"/api/users/{test_user.id}/likes", headers=auth_headers).json()["total"] == 1
