from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Iterable, Sequence

from nexora.models import (
    Deal,
    DealStatus,
    Lead,
    NotificationCategory,
    NotificationRecord,
    Task,
)

logger = logging.getLogger(__name__)

WELCOME_ID = "notif_welcome"
WELCOME_MESSAGE = "Welcome to Nexora CRM!"


def _first(items: Iterable, predicate):
    return next((item for item in items if predicate(item)), None)


def build_feed(
    leads: Sequence[Lead],
    deals: Sequence[Deal],
    tasks: Sequence[Task],
    now: datetime,
) -> list[NotificationRecord]:
    """Derive the notification feed from the current CRM state, newest first.

    At most one notification is produced per category: the first matching
    task, lead and deal in collection order. The welcome notification is
    always present.
    """
    today = now.date().isoformat()
    feed: list[NotificationRecord] = []

    task = _first(tasks, lambda t: t.due_date == today and not t.completed)
    if task:
        feed.append(
            NotificationRecord(
                id=f"notif_task_{task.id}",
                message=f'Task "{task.title}" is due today.',
                category=NotificationCategory.TASK,
                related_id=task.id,
                read=False,
                timestamp=now,
            )
        )

    lead = _first(leads, lambda l: l.status == "New")
    if lead:
        feed.append(
            NotificationRecord(
                id=f"notif_lead_{lead.id}",
                message=f"New lead: {lead.name} from {lead.company}.",
                category=NotificationCategory.LEAD,
                related_id=lead.id,
                read=False,
                timestamp=now - timedelta(hours=1),
            )
        )

    deal = _first(deals, lambda d: d.status == DealStatus.NEGOTIATION)
    if deal:
        feed.append(
            NotificationRecord(
                id=f"notif_deal_{deal.id}",
                message=f'Deal "{deal.title}" is in negotiation.',
                category=NotificationCategory.DEAL,
                related_id=deal.id,
                read=True,
                timestamp=now - timedelta(hours=5),
            )
        )

    feed.append(
        NotificationRecord(
            id=WELCOME_ID,
            message=WELCOME_MESSAGE,
            category=NotificationCategory.GENERAL,
            read=True,
            timestamp=now - timedelta(days=1),
        )
    )

    logger.debug("Built notification feed with %d records", len(feed))
    return sorted(feed, key=lambda n: n.timestamp, reverse=True)


def mark_read(feed: Sequence[NotificationRecord], notification_id: str) -> list[NotificationRecord]:
    """Return a copy of the feed with one notification marked read."""
    if not any(n.id == notification_id for n in feed):
        raise KeyError(notification_id)
    return [replace(n, read=True) if n.id == notification_id else n for n in feed]


def mark_all_read(feed: Sequence[NotificationRecord]) -> list[NotificationRecord]:
    return [n if n.read else replace(n, read=True) for n in feed]


def unread_count(feed: Sequence[NotificationRecord]) -> int:
    return sum(1 for n in feed if not n.read)


def navigation_target(notification: NotificationRecord) -> tuple[str, str | None] | None:
    """Map a clicked notification to the view (and record) it should open."""
    if notification.category == NotificationCategory.LEAD:
        return ("leads", notification.related_id)
    if notification.category == NotificationCategory.DEAL:
        return ("deals", None)
    if notification.category == NotificationCategory.TASK:
        return ("tasks", None)
    return None
