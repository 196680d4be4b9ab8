from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, HTTPException, Request

from nexora.services.feed import navigation_target
from nexora.store import CRMStore
from nexora.timeutil import time_since

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _store(request: Request) -> CRMStore:
    return request.app.state.store


def _serialize(notification, now=None) -> dict:
    data = {
        "id": notification.id,
        "message": notification.message,
        "type": notification.category.value,
        "related_id": notification.related_id,
        "read": notification.read,
        "timestamp": notification.timestamp.isoformat(),
    }
    if now is not None:
        data["age"] = time_since(notification.timestamp, now)
    return data


@router.get("")
async def list_notifications(request: Request):
    store = _store(request)
    feed = store.notifications
    now = datetime.now(feed[0].timestamp.tzinfo) if feed else None
    return {
        "unread": store.unread_notifications,
        "notifications": [_serialize(n, now) for n in feed],
    }


@router.post("/read-all")
async def read_all(request: Request):
    store = _store(request)
    store.mark_all_notifications_read()
    return {"unread": store.unread_notifications}


@router.post("/{notification_id}/read")
async def read_notification(request: Request, notification_id: str):
    store = _store(request)
    try:
        notification = store.mark_notification_read(notification_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Notification not found")
    target = navigation_target(notification)
    return {
        "notification": _serialize(notification),
        "view": target[0] if target else None,
        "related_id": target[1] if target else None,
        "unread": store.unread_notifications,
    }
