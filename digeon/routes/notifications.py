"""
Notification inbox routes.
"""
import uuid

from fastapi import APIRouter, Depends

from ..auth import get_required_user
from ..dependencies import Page, get_notification_service, list_page
from ..models.user import User
from ..responses import message, page
from ..serializers import notification_to_dict
from ..services.notifications import NotificationService

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("")
def get_notifications(
    pagination: Page = Depends(list_page),
    current_user: User = Depends(get_required_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    """The caller's notifications, newest first."""
    items, total = notifications.list(current_user.id, pagination.limit, pagination.offset)
    return page(
        "notifications",
        [notification_to_dict(n) for n in items],
        pagination.limit,
        pagination.offset,
        total,
    )


@router.get("/unread-count")
def unread_count(
    current_user: User = Depends(get_required_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    return {"unread_count": notifications.unread_count(current_user.id)}


@router.put("/read-all")
def mark_all_read(
    current_user: User = Depends(get_required_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    updated = notifications.mark_all_read(current_user.id)
    return {"message": "all notifications marked as read", "updated": updated}


@router.put("/{notification_id}/read")
def mark_read(
    notification_id: uuid.UUID,
    current_user: User = Depends(get_required_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    notifications.mark_read(notification_id, current_user.id)
    return message("notification marked as read")


# Declared before /{notification_id} so "all" is not parsed as an id
@router.delete("/all")
def delete_all_notifications(
    current_user: User = Depends(get_required_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    deleted = notifications.delete_all(current_user.id)
    return {"message": "all notifications deleted", "deleted": deleted}


@router.delete("/{notification_id}")
def delete_notification(
    notification_id: uuid.UUID,
    current_user: User = Depends(get_required_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    notifications.delete(notification_id, current_user.id)
    return message("notification deleted")
