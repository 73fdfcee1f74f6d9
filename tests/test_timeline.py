"""
Tests for timeline endpoints.
"""
from datetime import datetime, timedelta, timezone

from conftest import make_user
from digeon.models.follow import Follow
from digeon.models.post import Post


def add_post(db, author, content, minutes_ago=0, days_ago=0, **fields):
    post = Post(
        author_id=author.id,
        content=content,
        created_at=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago, days=days_ago),
        **fields,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


class TestTimelineEndpoints:
    """Test home, explore and trending timelines."""

    def test_home_timeline(self, client, db, test_user, other_user, auth_headers):
        """Own and followed posts, newest first; nothing else."""
        stranger = make_user(db, "stranger")
        db.add(Follow(follower_id=test_user.id, following_id=other_user.id))
        db.commit()

        own = add_post(db, test_user, "mine", minutes_ago=30)
        followed = add_post(db, other_user, "theirs", minutes_ago=10)
        add_post(db, stranger, "not followed", minutes_ago=5)
        add_post(db, other_user, "draft", minutes_ago=1, is_draft=True)
        add_post(db, other_user, "private", minutes_ago=1, is_public=False)

        response = client.get("/api/timeline/home", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [p["id"] for p in data["posts"]] == [str(followed.id), str(own.id)]

    def test_home_ignores_removed_follow(self, client, db, test_user, other_user, auth_headers):
        edge = Follow(follower_id=test_user.id, following_id=other_user.id)
        db.add(edge)
        db.commit()
        edge.soft_delete()
        db.commit()
        add_post(db, other_user, "gone from view")

        assert client.get("/api/timeline/home", headers=auth_headers).json()["total"] == 0

    def test_home_requires_auth(self, client, db):
        assert client.get("/api/timeline/home").status_code == 401

    def test_explore_anonymous(self, client, db, test_user, other_user):
        add_post(db, test_user, "one", minutes_ago=2)
        add_post(db, other_user, "two", minutes_ago=1)

        data = client.get("/api/timeline/explore?limit=1").json()
        assert data["total"] == 2
        assert data["limit"] == 1
        assert [p["content"] for p in data["posts"]] == ["two"]
        assert data["posts"][0]["is_liked"] is False

    def test_trending_orders_by_engagement(self, client, db, test_user):
        """Highest engagement first, ties broken by recency, old posts excluded."""
        quiet = add_post(db, test_user, "quiet", minutes_ago=1)
        popular = add_post(db, test_user, "popular", minutes_ago=30, likes_count=5, comments_count=2)
        tie_old = add_post(db, test_user, "tie old", minutes_ago=20, reposts_count=3)
        tie_new = add_post(db, test_user, "tie new", minutes_ago=10, likes_count=3)
        add_post(db, test_user, "ancient", days_ago=8, likes_count=100)

        data = client.get("/api/timeline/trending").json()
        ids = [p["id"] for p in data["posts"]]
        assert ids == [str(popular.id), str(tie_new.id), str(tie_old.id), str(quiet.id)]
        assert data["total"] == 4
