from digeon.database import SessionLocal, engine, Base
from digeon.models import User
from digeon.services import FollowService, LikeService, PostService, UserService

# Create tables
Base.metadata.create_all(bind=engine)

db = SessionLocal()

users_service = UserService(db)
posts_service = PostService(db)

# Sample accounts
accounts = [
    ("alice", "alice@example.com", "Alice"),
    ("bob", "bob@example.com", "Bob"),
    ("carol", "carol@example.com", "Carol"),
]

users = {}
for username, email, display_name in accounts:
    existing = db.query(User).filter(User.username == username).first()
    users[username] = existing or users_service.register(username, email, "password123", display_name)

# Follow graph
follows = FollowService(db)
for follower, following in [("alice", "bob"), ("bob", "alice"), ("carol", "alice")]:
    if not follows.is_following(users[follower].id, users[following].id):
        follows.follow(users[follower].id, users[following].id)

# Sample posts
first = posts_service.create(users["alice"].id, "Hello world! #intro #digeon")
posts_service.create(users["bob"].id, "Morning coffee and code #coffee")
posts_service.create(users["bob"].id, "Welcome Alice!", "reply", parent_post_id=first.post.id)
posts_service.create(users["carol"].id, "", "repost", original_post_id=first.post.id)
posts_service.create(users["carol"].id, "This is how it starts #digeon", "quote", original_post_id=first.post.id)

likes = LikeService(db, posts_service)
for username in ("bob", "carol"):
    if not likes.is_liked(users[username].id, first.post.id):
        likes.like(users[username].id, first.post.id)

print("Database seeded successfully!")
print(f"  - {len(users)} users")
print(f"  - 5 posts")

db.close()
