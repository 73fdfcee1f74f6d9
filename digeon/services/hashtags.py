"""
Hashtag extraction and linking.
"""
import re
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.post import Hashtag, Post

HASHTAG_PATTERN = re.compile(r"#(\w+)")
MAX_HASHTAG_LENGTH = 100


def extract_hashtags(content: str) -> List[str]:
    """Return the distinct lowercase hashtags in ``content``, first occurrence first."""
    seen = []
    for match in HASHTAG_PATTERN.findall(content or ""):
        name = match.lower()
        if len(name) <= MAX_HASHTAG_LENGTH and name not in seen:
            seen.append(name)
    return seen


def normalize_hashtag(query: str) -> str:
    return (query or "").strip().lstrip("#").strip().lower()


class HashtagService:
    def __init__(self, db: Session):
        self.db = db

    def get_or_create(self, name: str) -> Hashtag:
        hashtag = self.db.query(Hashtag).filter(Hashtag.name == name).first()
        if hashtag:
            return hashtag

        try:
            with self.db.begin_nested():
                hashtag = Hashtag(name=name)
                self.db.add(hashtag)
        except IntegrityError:
            # created concurrently
            hashtag = self.db.query(Hashtag).filter(Hashtag.name == name).one()
        return hashtag

    def set_post_hashtags(self, post: Post, content: str) -> List[Hashtag]:
        """Replace the post's hashtag links with those found in ``content``."""
        post.hashtags = [self.get_or_create(name) for name in extract_hashtags(content)]
        return post.hashtags
