"""
Tests for posts endpoints.
"""
import uuid

from digeon.models.notification import Notification, NotificationType
from digeon.models.post import Post


def create_post(client, headers, **body):
    body.setdefault("content", "Test post content")
    response = client.post("/api/posts", headers=headers, json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestPostsEndpoints:
    """Test posts endpoints."""

    def test_create_post(self, client, test_user, auth_headers):
        """Test creating an original post."""
        data = create_post(client, auth_headers, content="Hello #World")
        assert data["content"] == "Hello #World"
        assert data["type"] == "original"
        assert data["author"]["username"] == "testuser"
        assert data["hashtags"] == ["world"]
        assert data["likes_count"] == 0
        assert data["is_liked"] is False

    def test_create_post_unauthenticated(self, client, db):
        """Test creating a post without auth fails."""
        response = client.post("/api/posts", json={"content": "Test content"})
        assert response.status_code == 401

    def test_create_post_too_long(self, client, auth_headers):
        """281 characters is one too many."""
        response = client.post("/api/posts", headers=auth_headers, json={"content": "x" * 281})
        assert response.status_code == 400

    def test_create_post_at_limit(self, client, auth_headers):
        create_post(client, auth_headers, content="x" * 280)

    def test_create_post_invalid_type(self, client, auth_headers):
        response = client.post("/api/posts", headers=auth_headers, json={"content": "hi", "type": "story"})
        assert response.status_code == 400
        assert "invalid post type" in response.json()["error"]

    def test_repost_requires_original(self, client, auth_headers):
        response = client.post("/api/posts", headers=auth_headers, json={"type": "repost"})
        assert response.status_code == 400

    def test_reply_requires_parent(self, client, auth_headers):
        response = client.post("/api/posts", headers=auth_headers, json={"content": "hi", "type": "reply"})
        assert response.status_code == 400

    def test_reply_to_missing_parent(self, client, auth_headers):
        response = client.post(
            "/api/posts",
            headers=auth_headers,
            json={"content": "hi", "type": "reply", "parent_post_id": str(uuid.uuid4())},
        )
        assert response.status_code == 404

    def test_malformed_reference_id(self, client, auth_headers):
        response = client.post(
            "/api/posts",
            headers=auth_headers,
            json={"content": "hi", "type": "quote", "original_post_id": "nope"},
        )
        assert response.status_code == 400

    def test_reply_updates_parent_comment_count(self, client, auth_headers, other_headers):
        """Creating a reply adds one to the parent; deleting it takes one away."""
        parent = create_post(client, auth_headers, content="parent")
        reply = create_post(
            client, other_headers, content="reply", type="reply", parent_post_id=parent["id"]
        )
        assert reply["parent_post_id"] == parent["id"]
        assert reply["parent_post"]["id"] == parent["id"]

        assert client.get(f"/api/posts/{parent['id']}").json()["comments_count"] == 1

        response = client.delete(f"/api/posts/{reply['id']}", headers=other_headers)
        assert response.status_code == 200
        assert client.get(f"/api/posts/{parent['id']}").json()["comments_count"] == 0

    def test_repost_updates_counter_and_flag(self, client, db, other_user, auth_headers, other_headers):
        """A repost bumps the original's counter and marks it reposted for the reposter."""
        original = create_post(client, auth_headers, content="original")
        repost = create_post(
            client, other_headers, content="", type="repost", original_post_id=original["id"]
        )
        assert repost["original_post"]["id"] == original["id"]

        data = client.get(f"/api/posts/{original['id']}", headers=other_headers).json()
        assert data["reposts_count"] == 1
        assert data["is_reposted"] is True

        notification = db.query(Notification).filter(Notification.actor_id == other_user.id).one()
        assert notification.type == NotificationType.REPOST

        client.delete(f"/api/posts/{repost['id']}", headers=other_headers)
        assert client.get(f"/api/posts/{original['id']}").json()["reposts_count"] == 0

    def test_quote_creates_notification(self, client, db, other_user, auth_headers, other_headers):
        original = create_post(client, auth_headers, content="quotable")
        create_post(client, other_headers, content="so true", type="quote", original_post_id=original["id"])

        notification = db.query(Notification).filter(Notification.actor_id == other_user.id).one()
        assert notification.type == NotificationType.QUOTE
        assert notification.message == "quoted your post"

    def test_get_post_not_found(self, client, db):
        response = client.get(f"/api/posts/{uuid.uuid4()}")
        assert response.status_code == 404

    def test_draft_hidden_from_others(self, client, auth_headers, other_headers):
        draft = create_post(client, auth_headers, content="secret", is_draft=True)
        assert client.get(f"/api/posts/{draft['id']}", headers=auth_headers).status_code == 200
        assert client.get(f"/api/posts/{draft['id']}", headers=other_headers).status_code == 404

    def test_private_post_hidden_from_others(self, client, auth_headers, other_headers):
        private = create_post(client, auth_headers, content="secret", is_public=False)
        assert client.get(f"/api/posts/{private['id']}", headers=auth_headers).status_code == 200
        assert client.get(f"/api/posts/{private['id']}", headers=other_headers).status_code == 404
        assert client.get(f"/api/posts/{private['id']}").status_code == 404

    def test_cannot_reply_to_or_quote_private_post(self, client, auth_headers, other_headers):
        private = create_post(client, auth_headers, content="secret", is_public=False)

        response = client.post(
            "/api/posts",
            headers=other_headers,
            json={"content": "psst", "type": "reply", "parent_post_id": private["id"]},
        )
        assert response.status_code == 404
        response = client.post(
            "/api/posts",
            headers=other_headers,
            json={"content": "look", "type": "quote", "original_post_id": private["id"]},
        )
        assert response.status_code == 404

    def test_update_post(self, client, auth_headers):
        """Editing content re-derives hashtags."""
        post = create_post(client, auth_headers, content="first #old")
        response = client.put(
            f"/api/posts/{post['id']}", headers=auth_headers, json={"content": "second #new"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["content"] == "second #new"
        assert data["hashtags"] == ["new"]

    def test_update_post_not_author(self, client, auth_headers, other_headers):
        post = create_post(client, auth_headers)
        response = client.put(f"/api/posts/{post['id']}", headers=other_headers, json={"content": "mine now"})
        assert response.status_code == 403

    def test_update_post_too_long(self, client, auth_headers):
        post = create_post(client, auth_headers)
        response = client.put(f"/api/posts/{post['id']}", headers=auth_headers, json={"content": "x" * 281})
        assert response.status_code == 400

    def test_delete_post(self, client, db, auth_headers):
        """Deletion is soft: the row stays but the post disappears."""
        post = create_post(client, auth_headers)
        response = client.delete(f"/api/posts/{post['id']}", headers=auth_headers)
        assert response.status_code == 200

        assert client.get(f"/api/posts/{post['id']}").status_code == 404
        row = db.query(Post).filter(Post.id == uuid.UUID(post["id"])).one()
        assert row.deleted_at is not None

    def test_delete_post_not_author(self, client, auth_headers, other_headers):
        post = create_post(client, auth_headers)
        response = client.delete(f"/api/posts/{post['id']}", headers=other_headers)
        assert response.status_code == 403

    def test_post_replies_oldest_first(self, client, auth_headers, other_headers):
        parent = create_post(client, auth_headers, content="parent")
        first = create_post(client, other_headers, content="first", type="reply", parent_post_id=parent["id"])
        second = create_post(client, auth_headers, content="second", type="reply", parent_post_id=parent["id"])

        response = client.get(f"/api/posts/{parent['id']}/replies")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [p["id"] for p in data["posts"]] == [first["id"], second["id"]]
