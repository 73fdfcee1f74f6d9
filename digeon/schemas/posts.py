import uuid
from pydantic import BaseModel
from typing import List, Optional


class PostCreate(BaseModel):
    content: str = ""
    type: str = "original"
    original_post_id: Optional[uuid.UUID] = None
    parent_post_id: Optional[uuid.UUID] = None
    media_ids: List[uuid.UUID] = []
    media_urls: List[str] = []
    is_draft: bool = False
    is_public: bool = True


class PostUpdate(BaseModel):
    content: str
