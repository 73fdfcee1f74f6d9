"""
Tests for comment endpoints.
"""
import uuid

from digeon.models.notification import Notification, NotificationType
from digeon.models.post import Post, PostType


def make_post(db, author, content="a post to discuss"):
    post = Post(author_id=author.id, content=content)
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


def comment(client, headers, post_id, content="nice post"):
    response = client.post(f"/api/posts/{post_id}/comments", headers=headers, json={"content": content})
    assert response.status_code == 201, response.text
    return response.json()


class TestCommentEndpoints:
    """Comments are reply posts with a comment-shaped response."""

    def test_create_comment(self, client, db, test_user, other_user, other_headers):
        post = make_post(db, test_user)
        data = comment(client, other_headers, post.id)

        assert data["post_id"] == str(post.id)
        assert data["parent_id"] == str(post.id)
        assert data["user_id"] == str(other_user.id)
        assert data["user"]["username"] == "otheruser"
        assert data["content"] == "nice post"
        assert data["replies_count"] == 0

        reply_row = db.query(Post).filter(Post.id == uuid.UUID(data["id"])).one()
        assert reply_row.type.value == "reply"
        assert client.get(f"/api/posts/{post.id}").json()["comments_count"] == 1

    def test_comment_notifies_author(self, client, db, test_user, other_headers):
        post = make_post(db, test_user)
        comment(client, other_headers, post.id)
        comment(client, other_headers, post.id, "and again")

        notes = db.query(Notification).filter(Notification.user_id == test_user.id).all()
        assert len(notes) == 2
        assert all(n.type == NotificationType.COMMENT for n in notes)

    def test_comment_requires_content(self, client, db, test_user, auth_headers):
        post = make_post(db, test_user)
        response = client.post(f"/api/posts/{post.id}/comments", headers=auth_headers, json={"content": "   "})
        assert response.status_code == 400
        assert response.json()["error"] == "content is required"

    def test_comment_too_long(self, client, db, test_user, auth_headers):
        post = make_post(db, test_user)
        response = client.post(f"/api/posts/{post.id}/comments", headers=auth_headers, json={"content": "x" * 281})
        assert response.status_code == 400

    def test_comment_on_missing_post(self, client, auth_headers):
        response = client.post(f"/api/posts/{uuid.uuid4()}/comments", headers=auth_headers, json={"content": "hi"})
        assert response.status_code == 404

    def test_nested_reply_points_at_root_post(self, client, db, test_user, auth_headers, other_headers):
        """A reply to a comment reports the root post and the comment as parent."""
        post = make_post(db, test_user)
        top = comment(client, other_headers, post.id)

        response = client.post(
            f"/api/comments/{top['id']}/replies", headers=auth_headers, json={"content": "thanks"}
        )
        assert response.status_code == 201
        reply = response.json()
        assert reply["post_id"] == str(post.id)
        assert reply["parent_id"] == top["id"]

        replies = client.get(f"/api/comments/{top['id']}/replies").json()
        assert replies["total"] == 1
        assert replies["replies"][0]["id"] == reply["id"]

    def test_reply_to_non_comment(self, client, db, test_user, auth_headers):
        """Only reply posts can be replied to as comments."""
        post = make_post(db, test_user)
        response = client.post(f"/api/comments/{post.id}/replies", headers=auth_headers, json={"content": "hi"})
        assert response.status_code == 404
        assert response.json()["error"] == "comment not found"

    def test_list_comments_oldest_first(self, client, db, test_user, auth_headers, other_headers):
        post = make_post(db, test_user)
        first = comment(client, other_headers, post.id, "first")
        second = comment(client, auth_headers, post.id, "second")

        data = client.get(f"/api/posts/{post.id}/comments", headers=auth_headers).json()
        assert data["total"] == 2
        assert [c["id"] for c in data["comments"]] == [first["id"], second["id"]]
        assert data["comments"][0]["is_liked"] is False

    def test_update_comment(self, client, db, test_user, other_headers, auth_headers):
        post = make_post(db, test_user)
        top = comment(client, other_headers, post.id)

        response = client.put(f"/api/comments/{top['id']}", headers=other_headers, json={"content": "edited"})
        assert response.status_code == 200
        assert response.json()["content"] == "edited"

        response = client.put(f"/api/comments/{top['id']}", headers=auth_headers, json={"content": "hijack"})
        assert response.status_code == 403

    def test_delete_comment(self, client, db, test_user, other_headers):
        post = make_post(db, test_user)
        top = comment(client, other_headers, post.id)

        response = client.delete(f"/api/comments/{top['id']}", headers=other_headers)
        assert response.status_code == 200
        assert client.get(f"/api/posts/{post.id}").json()["comments_count"] == 0
        assert client.get(f"/api/posts/{post.id}/comments").json()["total"] == 0

    def test_delete_comment_not_author(self, client, db, test_user, other_headers, auth_headers):
        post = make_post(db, test_user)
        top = comment(client, other_headers, post.id)
        response = client.delete(f"/api/comments/{top['id']}", headers=auth_headers)
        assert response.status_code == 403

    def test_cannot_comment_on_hidden_posts(self, client, db, test_user, other_headers):
        private = Post(author_id=test_user.id, content="secret", is_public=False)
        draft = Post(author_id=test_user.id, content="unfinished", is_draft=True)
        db.add_all([private, draft])
        db.commit()

        for post in (private, draft):
            response = client.post(f"/api/posts/{post.id}/comments", headers=other_headers, json={"content": "hi"})
            assert response.status_code == 404
            assert client.get(f"/api/posts/{post.id}/comments", headers=other_headers).status_code == 404
        assert db.query(Post).filter(Post.type == PostType.REPLY).count() == 0
