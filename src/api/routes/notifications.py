"""Notification settings and inbox routes."""

from fastapi import APIRouter

from src.api.dependencies import CurrentUid, Matching
from src.modules.inbox import InboxListResponse
from src.modules.users import NotificationBindingRequest, NotificationPreferenceRequest

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.put("/binding")
async def bind_chat(
    data: NotificationBindingRequest,
    current_uid: CurrentUid,
    matching: Matching,
) -> dict:
    """Bind a Telegram chat to the current user."""
    await matching.set_notification_binding(current_uid, data.chat_id)
    return {"success": True, "message": "Chat bound"}


@router.delete("/binding")
async def unbind_chat(
    current_uid: CurrentUid,
    matching: Matching,
) -> dict:
    """Remove the current user's Telegram chat (e.g. on logout)."""
    await matching.set_notification_binding(current_uid, None)
    return {"success": True, "message": "Chat unbound"}


@router.put("/preference")
async def set_preference(
    data: NotificationPreferenceRequest,
    current_uid: CurrentUid,
    matching: Matching,
) -> dict:
    """Switch notifications on or off for the current user."""
    await matching.set_notifications_enabled(current_uid, data.notifications_enabled)
    return {"success": True, "notifications_enabled": data.notifications_enabled}


@router.get("/user/{uid}", response_model=InboxListResponse)
async def list_notifications(
    uid: str,
    current_uid: CurrentUid,
    matching: Matching,
) -> dict:
    """List the newest stored notifications of the current user."""
    entries = await matching.list_notifications(current_uid, uid)
    return {"success": True, "count": len(entries), "notifications": entries}


@router.patch("/{entry_id}/read")
async def mark_read(
    entry_id: int,
    current_uid: CurrentUid,
    matching: Matching,
) -> dict:
    """Mark a notification as read."""
    await matching.mark_notification_read(current_uid, entry_id)
    return {"success": True, "message": "Notification marked as read"}


@router.delete("/{entry_id}")
async def delete_notification(
    entry_id: int,
    current_uid: CurrentUid,
    matching: Matching,
) -> dict:
    """Delete a notification."""
    await matching.delete_notification(current_uid, entry_id)
    return {"success": True, "message": "Notification deleted"}
