from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from nexora.models import ReminderOffset, Task
from nexora.timeutil import due_instant, reminder_offset, time_since


def test_due_instant_with_time():
    task = Task(id="t", due_date="2025-09-22", due_time="14:30")
    assert due_instant(task) == datetime(2025, 9, 22, 14, 30)


def test_due_instant_accepts_seconds():
    task = Task(id="t", due_date="2025-09-22", due_time="14:30:15")
    assert due_instant(task) == datetime(2025, 9, 22, 14, 30, 15)


def test_due_instant_defaults_to_nine():
    task = Task(id="t", due_date="2025-09-22")
    assert due_instant(task) == datetime(2025, 9, 22, 9, 0)


def test_due_instant_attaches_timezone():
    task = Task(id="t", due_date="2025-09-22", due_time="10:00")
    assert due_instant(task, timezone.utc).tzinfo is timezone.utc


@pytest.mark.parametrize(
    "due_date, due_time",
    [
        ("2025-02-30", None),
        ("", None),
        ("2025-09-22", "9am"),
        ("2025-09-22", "24:00"),
        ("2025-09-22", "10:00+05:00"),
    ],
)
def test_due_instant_malformed(due_date, due_time):
    with pytest.raises(ValueError):
        due_instant(Task(id="t", due_date=due_date, due_time=due_time))


def test_reminder_offset():
    assert reminder_offset(ReminderOffset.FIVE_MINUTES) == timedelta(minutes=5)
    assert reminder_offset("15m") == timedelta(minutes=15)
    assert reminder_offset("1h") == timedelta(hours=1)
    assert reminder_offset(ReminderOffset.ONE_DAY) == timedelta(days=1)
    assert reminder_offset(ReminderOffset.NONE) is None
    assert reminder_offset(None) is None
    assert reminder_offset("2w") is None


def test_time_since():
    now = datetime(2025, 9, 22, 12, 0)
    assert time_since(now, now) == "Just now"
    assert time_since(now - timedelta(minutes=5), now) == "5 minutes ago"
    assert time_since(now - timedelta(hours=5), now) == "5 hours ago"
    assert time_since(now - timedelta(days=3), now) == "3 days ago"
