from __future__ import annotations

import copy
from datetime import datetime, timedelta

import pytest

from nexora.models import Deal, DealStatus, Lead, NotificationCategory, Task
from nexora.services.feed import (
    WELCOME_ID,
    build_feed,
    mark_all_read,
    mark_read,
    navigation_target,
    unread_count,
)

NOW = datetime(2025, 9, 22, 12, 0)


@pytest.fixture
def leads():
    return [
        Lead(id="lead_001", name="John Smith", company="Acme Corp", status="Contacted"),
        Lead(id="lead_002", name="Jane Doe", company="Innovate LLC", status="New"),
        Lead(id="lead_005", name="David Miller", company="Global Solutions", status="New"),
    ]


@pytest.fixture
def deals():
    return [
        Deal(id="deal_001", title="Acme Website", status=DealStatus.PROPOSAL),
        Deal(id="deal_002", title="Innovate SaaS", status=DealStatus.NEGOTIATION),
        Deal(id="deal_003", title="Other", status=DealStatus.NEGOTIATION),
    ]


@pytest.fixture
def tasks():
    return [
        Task(id="task_001", title="Done already", due_date="2025-09-22", completed=True),
        Task(id="task_002", title="Prepare proposal", due_date="2025-09-22", due_time="14:30"),
        Task(id="task_003", title="Also today", due_date="2025-09-22"),
        Task(id="task_004", title="Tomorrow", due_date="2025-09-23"),
    ]


def test_empty_inputs_yield_only_welcome():
    feed = build_feed([], [], [], NOW)
    assert len(feed) == 1
    assert feed[0].id == WELCOME_ID
    assert feed[0].read is True
    assert feed[0].category == NotificationCategory.GENERAL
    assert feed[0].timestamp == NOW - timedelta(days=1)


def test_full_feed_first_match_per_category(leads, deals, tasks):
    feed = build_feed(leads, deals, tasks, NOW)
    assert [n.id for n in feed] == [
        "notif_task_task_002",
        "notif_lead_lead_002",
        "notif_deal_deal_002",
        WELCOME_ID,
    ]

    task_n, lead_n, deal_n, _ = feed
    assert task_n.message == 'Task "Prepare proposal" is due today.'
    assert task_n.related_id == "task_002"
    assert task_n.read is False
    assert task_n.timestamp == NOW

    assert lead_n.message == "New lead: Jane Doe from Innovate LLC."
    assert lead_n.read is False
    assert lead_n.timestamp == NOW - timedelta(hours=1)

    assert deal_n.message == 'Deal "Innovate SaaS" is in negotiation.'
    assert deal_n.read is True
    assert deal_n.timestamp == NOW - timedelta(hours=5)


def test_single_task_due_today_is_referenced():
    tasks = [
        Task(id="a", title="Later", due_date="2025-10-01"),
        Task(id="b", title="Today", due_date="2025-09-22"),
    ]
    feed = build_feed([], [], tasks, NOW)
    task_records = [n for n in feed if n.category == NotificationCategory.TASK]
    assert len(task_records) == 1
    assert task_records[0].related_id == "b"


def test_completed_task_due_today_is_ignored():
    tasks = [Task(id="a", title="Done", due_date="2025-09-22", completed=True)]
    feed = build_feed([], [], tasks, NOW)
    assert [n.id for n in feed] == [WELCOME_ID]


def test_feed_sorted_newest_first(leads, deals, tasks):
    feed = build_feed(leads, deals, tasks, NOW)
    for newer, older in zip(feed, feed[1:]):
        assert newer.timestamp >= older.timestamp


def test_feed_is_deterministic(leads, deals, tasks):
    assert build_feed(leads, deals, tasks, NOW) == build_feed(leads, deals, tasks, NOW)


def test_feed_does_not_mutate_inputs(leads, deals, tasks):
    before = (copy.deepcopy(leads), copy.deepcopy(deals), copy.deepcopy(tasks))
    build_feed(leads, deals, tasks, NOW)
    assert (leads, deals, tasks) == before


def test_mark_read_returns_new_feed(leads, deals, tasks):
    feed = build_feed(leads, deals, tasks, NOW)
    updated = mark_read(feed, "notif_lead_lead_002")

    assert unread_count(feed) == 2
    assert unread_count(updated) == 1
    assert next(n for n in updated if n.id == "notif_lead_lead_002").read is True


def test_mark_read_unknown_id():
    feed = build_feed([], [], [], NOW)
    with pytest.raises(KeyError):
        mark_read(feed, "notif_missing")


def test_mark_all_read(leads, deals, tasks):
    feed = mark_all_read(build_feed(leads, deals, tasks, NOW))
    assert unread_count(feed) == 0


def test_navigation_target(leads, deals, tasks):
    targets = {n.id: navigation_target(n) for n in build_feed(leads, deals, tasks, NOW)}
    assert targets["notif_lead_lead_002"] == ("leads", "lead_002")
    assert targets["notif_deal_deal_002"] == ("deals", None)
    assert targets["notif_task_task_002"] == ("tasks", None)
    assert targets[WELCOME_ID] is None
