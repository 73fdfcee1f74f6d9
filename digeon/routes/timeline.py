"""
Timeline routes.
"""
import uuid
from typing import Optional

from fastapi import APIRouter, Depends

from ..auth import get_required_user
from ..dependencies import Page, get_timeline_service, get_viewer_id, list_page
from ..models.user import User
from ..serializers import timeline_to_dict
from ..services.timeline import TimelineService

router = APIRouter(prefix="/api/timeline", tags=["timeline"])


@router.get("/home")
def home_timeline(
    pagination: Page = Depends(list_page),
    current_user: User = Depends(get_required_user),
    timeline: TimelineService = Depends(get_timeline_service),
):
    """Posts by the caller and the accounts they follow."""
    return timeline_to_dict(timeline.home(current_user.id, pagination.limit, pagination.offset))


@router.get("/explore")
def explore_timeline(
    pagination: Page = Depends(list_page),
    viewer_id: Optional[uuid.UUID] = Depends(get_viewer_id),
    timeline: TimelineService = Depends(get_timeline_service),
):
    return timeline_to_dict(timeline.explore(viewer_id, pagination.limit, pagination.offset))


@router.get("/trending")
def trending_timeline(
    pagination: Page = Depends(list_page),
    viewer_id: Optional[uuid.UUID] = Depends(get_viewer_id),
    timeline: TimelineService = Depends(get_timeline_service),
):
    return timeline_to_dict(timeline.trending(viewer_id, pagination.limit, pagination.offset))
