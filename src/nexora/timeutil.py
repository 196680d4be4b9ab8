"""Time arithmetic shared by the feed builder and the reminder scheduler."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo

from nexora.models import ReminderOffset, Task

DEFAULT_DUE_TIME = time(9, 0)

_OFFSETS = {
    ReminderOffset.FIVE_MINUTES: timedelta(minutes=5),
    ReminderOffset.FIFTEEN_MINUTES: timedelta(minutes=15),
    ReminderOffset.ONE_HOUR: timedelta(hours=1),
    ReminderOffset.ONE_DAY: timedelta(days=1),
}

# (seconds per unit, label), largest first
_UNITS = [
    (31536000, "years"),
    (2592000, "months"),
    (86400, "days"),
    (3600, "hours"),
    (60, "minutes"),
]


def due_instant(task: Task, tz: tzinfo | None = None) -> datetime:
    """Combine a task's due date and due time into a single instant.

    A missing due time means 09:00. Raises ``ValueError`` when the date or
    time cannot be parsed, or when the time carries its own UTC offset.
    """
    try:
        day = date.fromisoformat(task.due_date)
        at = time.fromisoformat(task.due_time) if task.due_time else DEFAULT_DUE_TIME
        if at.tzinfo is not None:
            raise ValueError("due time must not carry a UTC offset")
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"Task {task.id!r}: malformed due date/time {task.due_date!r} {task.due_time!r}"
        ) from exc
    return datetime.combine(day, at, tzinfo=tz)


def reminder_offset(value: ReminderOffset | str | None) -> timedelta | None:
    """Resolve a reminder setting to its lead time, or None for no reminder."""
    if not value:
        return None
    try:
        return _OFFSETS.get(ReminderOffset(value))
    except ValueError:
        return None


def time_since(moment: datetime, now: datetime) -> str:
    """Human label for how long ago ``moment`` was, e.g. ``"5 hours ago"``."""
    seconds = (now - moment).total_seconds()
    for unit, label in _UNITS:
        interval = seconds / unit
        if interval > 1:
            return f"{int(interval)} {label} ago"
    return "Just now"
