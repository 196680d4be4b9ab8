"""In-memory state container for the CRM.

``CRMStore`` is the single owner of leads, contacts, deals, tasks, the
notification feed and the set of fired reminders. The feed builder and the
reminder scheduler are called from here and never hold state of their own.
Nothing is persisted; the store lives as long as the process.
"""

from __future__ import annotations

import logging
import uuid
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import date, datetime

from nexora.data import sample_contacts, sample_deals, sample_leads, sample_tasks
from nexora.models import Contact, Deal, DealStatus, Lead, NotificationRecord, Task, TaskPriority
from nexora.services.feed import build_feed, mark_all_read, mark_read, unread_count
from nexora.services.reminders import ReminderScheduler

logger = logging.getLogger(__name__)

_PRIORITY_ORDER = {TaskPriority.HIGH: 1, TaskPriority.MEDIUM: 2, TaskPriority.LOW: 3}


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


def _sort_instant(task: Task) -> datetime:
    try:
        return datetime.fromisoformat(f"{task.due_date}T{task.due_time or '00:00'}").replace(tzinfo=None)
    except (TypeError, ValueError):
        return datetime.max


@dataclass
class CRMStore:
    leads: list[Lead] = field(default_factory=list)
    contacts: list[Contact] = field(default_factory=list)
    deals: list[Deal] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    notifications: list[NotificationRecord] = field(default_factory=list)
    fired_reminders: frozenset[str] = frozenset()

    @classmethod
    def from_sample(cls, today: date) -> CRMStore:
        return cls(
            leads=sample_leads(),
            contacts=sample_contacts(),
            deals=sample_deals(),
            tasks=sample_tasks(today),
        )

    # --- notifications ---

    def refresh_notifications(self, now: datetime) -> list[NotificationRecord]:
        self.notifications = build_feed(self.leads, self.deals, self.tasks, now)
        return self.notifications

    def mark_notification_read(self, notification_id: str) -> NotificationRecord:
        self.notifications = mark_read(self.notifications, notification_id)
        return next(n for n in self.notifications if n.id == notification_id)

    def mark_all_notifications_read(self) -> None:
        self.notifications = mark_all_read(self.notifications)

    @property
    def unread_notifications(self) -> int:
        return unread_count(self.notifications)

    # --- reminders ---

    def check_reminders(self, scheduler: ReminderScheduler, now: datetime) -> frozenset[str]:
        """Run one reminder poll against the live task list."""
        self.fired_reminders = scheduler.poll(list(self.tasks), self.fired_reminders, now)
        return self.fired_reminders

    # --- tasks ---

    def get_task(self, task_id: str) -> Task:
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise KeyError(task_id)

    def save_task(self, task: Task) -> Task:
        """Insert a new task (at the front) or replace the one with the same id."""
        if not task.id:
            task = replace(task, id=_new_id("task"))
        for i, existing in enumerate(self.tasks):
            if existing.id == task.id:
                self.tasks[i] = task
                return task
        self.tasks.insert(0, task)
        logger.info("Created task %s", task.id)
        return task

    def toggle_task(self, task_id: str) -> Task:
        task = self.get_task(task_id)
        return self.save_task(replace(task, completed=not task.completed))

    def delete_task(self, task_id: str) -> None:
        self.get_task(task_id)
        self.tasks = [t for t in self.tasks if t.id != task_id]

    def list_tasks(
        self,
        priority: TaskPriority | None = None,
        search: str = "",
        sort: str = "dueDate",
    ) -> list[Task]:
        """Filter by priority and search text, open tasks first.

        ``sort`` is ``"dueDate"`` (earliest first) or ``"priority"`` (High first).
        """
        term = search.lower()
        rows = [
            t
            for t in self.tasks
            if (term in t.title.lower() or term in t.related_to.lower())
            and (priority is None or t.priority == priority)
        ]
        if sort == "priority":
            key = lambda t: (t.completed, _PRIORITY_ORDER.get(t.priority, 99))
        else:
            key = lambda t: (t.completed, _sort_instant(t))
        return sorted(rows, key=key)

    # --- leads ---

    def get_lead(self, lead_id: str) -> Lead:
        for lead in self.leads:
            if lead.id == lead_id:
                return lead
        raise KeyError(lead_id)

    def save_lead(self, lead: Lead) -> Lead:
        if not lead.id:
            lead = replace(lead, id=_new_id("lead"))
        for i, existing in enumerate(self.leads):
            if existing.id == lead.id:
                self.leads[i] = lead
                return lead
        self.leads.insert(0, lead)
        return lead

    def delete_lead(self, lead_id: str) -> None:
        self.get_lead(lead_id)
        self.leads = [l for l in self.leads if l.id != lead_id]

    # --- deals ---

    def get_deal(self, deal_id: str) -> Deal:
        for deal in self.deals:
            if deal.id == deal_id:
                return deal
        raise KeyError(deal_id)

    def save_deal(self, deal: Deal) -> Deal:
        if not deal.id:
            deal = replace(deal, id=_new_id("deal"))
        for i, existing in enumerate(self.deals):
            if existing.id == deal.id:
                self.deals[i] = deal
                return deal
        self.deals.insert(0, deal)
        return deal

    def set_deal_status(self, deal_id: str, status: DealStatus) -> Deal:
        """Move a deal to another pipeline stage."""
        deal = self.get_deal(deal_id)
        logger.info("Deal %s moved from %s to %s", deal_id, deal.status.value, DealStatus(status).value)
        return self.save_deal(replace(deal, status=DealStatus(status)))

    def delete_deal(self, deal_id: str) -> None:
        self.get_deal(deal_id)
        self.deals = [d for d in self.deals if d.id != deal_id]

    # --- contacts ---

    def get_contact(self, contact_id: str) -> Contact:
        for contact in self.contacts:
            if contact.id == contact_id:
                return contact
        raise KeyError(contact_id)

    def save_contact(self, contact: Contact) -> Contact:
        if not contact.id:
            contact = replace(contact, id=_new_id("contact"))
        for i, existing in enumerate(self.contacts):
            if existing.id == contact.id:
                self.contacts[i] = contact
                return contact
        self.contacts.insert(0, contact)
        return contact

    def delete_contact(self, contact_id: str) -> None:
        self.get_contact(contact_id)
        self.contacts = [c for c in self.contacts if c.id != contact_id]

    # --- search ---

    def search(self, term: str, limit: int = 10) -> list[dict]:
        """Case-insensitive match across leads, contacts, deals and tasks.

        Results are grouped in that order and capped at ``limit``.
        """
        term = term.strip().lower()
        if not term:
            return []

        def hit(*values: str) -> bool:
            return any(term in v.lower() for v in values)

        results = (
            [{"type": "Lead", "id": l.id, "name": l.name, "context": l.company}
             for l in self.leads if hit(l.name, l.company)]
            + [{"type": "Contact", "id": c.id, "name": c.name, "context": c.company}
               for c in self.contacts if hit(c.name, c.company)]
            + [{"type": "Deal", "id": d.id, "name": d.title, "context": d.company}
               for d in self.deals if hit(d.title, d.company)]
            + [{"type": "Task", "id": t.id, "name": t.title, "context": t.related_to}
               for t in self.tasks if hit(t.title, t.related_to)]
        )
        return results[:limit]

    # --- dashboard ---

    def summary(self) -> dict:
        """Headline numbers for the dashboard."""
        return {
            "total_revenue": sum(d.value for d in self.deals if d.status == DealStatus.CLOSED_WON),
            "deals_in_progress": sum(
                1 for d in self.deals if d.status in (DealStatus.NEGOTIATION, DealStatus.PROPOSAL)
            ),
            "new_leads": sum(1 for l in self.leads if l.status == "New"),
            "lead_sources": dict(Counter(l.source for l in self.leads)),
            "deal_funnel": {
                "New": sum(1 for d in self.deals if d.status == DealStatus.NEW),
                "Proposal": sum(1 for d in self.deals if d.status == DealStatus.PROPOSAL),
                "Negotiation": sum(1 for d in self.deals if d.status == DealStatus.NEGOTIATION),
                "Won": sum(1 for d in self.deals if d.status == DealStatus.CLOSED_WON),
            },
            "tasks": {
                "completed": sum(1 for t in self.tasks if t.completed),
                "pending": sum(1 for t in self.tasks if not t.completed),
            },
        }
