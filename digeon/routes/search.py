"""
Search routes for users, posts and hashtags.
"""
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..dependencies import (
    Page,
    get_search_service,
    get_viewer_id,
    list_page,
    search_all_page,
    trending_hashtags_page,
)
from ..responses import page
from ..serializers import details_to_dict, hashtag_to_dict, user_public
from ..services.search import SearchService

router = APIRouter(prefix="/api/search", tags=["search"])


@router.get("")
def search_all(
    q: str = Query(""),
    pagination: Page = Depends(search_all_page),
    viewer_id: Optional[uuid.UUID] = Depends(get_viewer_id),
    search: SearchService = Depends(get_search_service),
):
    """Users, posts and hashtags matching ``q`` in one response."""
    results = search.search_all(q, viewer_id, pagination.limit)
    return {
        "users": [user_public(u) for u in results.users],
        "posts": [details_to_dict(d) for d in results.posts],
        "hashtags": [hashtag_to_dict(h) for h in results.hashtags],
        "total": results.total,
    }


@router.get("/users")
def search_users(
    q: str = Query(""),
    pagination: Page = Depends(list_page),
    search: SearchService = Depends(get_search_service),
):
    users, total = search.users(q, pagination.limit, pagination.offset)
    return page("users", [user_public(u) for u in users], pagination.limit, pagination.offset, total)


@router.get("/posts")
def search_posts(
    q: str = Query(""),
    pagination: Page = Depends(list_page),
    viewer_id: Optional[uuid.UUID] = Depends(get_viewer_id),
    search: SearchService = Depends(get_search_service),
):
    posts, total = search.posts_matching(q, viewer_id, pagination.limit, pagination.offset)
    return page("posts", [details_to_dict(d) for d in posts], pagination.limit, pagination.offset, total)


@router.get("/hashtags")
def search_hashtags(
    q: str = Query(""),
    pagination: Page = Depends(list_page),
    search: SearchService = Depends(get_search_service),
):
    hashtags, total = search.hashtags(q, pagination.limit, pagination.offset)
    return page("hashtags", [hashtag_to_dict(h) for h in hashtags], pagination.limit, pagination.offset, total)


@router.get("/hashtags/{hashtag}/posts")
def hashtag_posts(
    hashtag: str,
    pagination: Page = Depends(list_page),
    viewer_id: Optional[uuid.UUID] = Depends(get_viewer_id),
    search: SearchService = Depends(get_search_service),
):
    posts, total = search.hashtag_posts(hashtag, viewer_id, pagination.limit, pagination.offset)
    return page("posts", [details_to_dict(d) for d in posts], pagination.limit, pagination.offset, total)


@router.get("/trending-hashtags")
def trending_hashtags(
    pagination: Page = Depends(trending_hashtags_page),
    search: SearchService = Depends(get_search_service),
):
    """Hashtags with the most public posts over the last week."""
    ranked = search.trending_hashtags(pagination.limit)
    return {
        "hashtags": [hashtag_to_dict(h, count) for h, count in ranked],
        "limit": pagination.limit,
    }
