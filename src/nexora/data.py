"""Sample CRM records the app starts with.

Task due dates are relative to ``today`` so the demo always has something
due soon.
"""

from __future__ import annotations

from datetime import date, timedelta

from nexora.models import (
    Contact,
    Deal,
    DealStatus,
    Lead,
    LeadNote,
    ReminderOffset,
    Task,
    TaskPriority,
)


def sample_leads() -> list[Lead]:
    return [
        Lead(
            id="lead_001", name="John Smith", company="Acme Corp", email="john@acme.com",
            status="Contacted", value=5000, last_contact="2025-09-15", source="Website",
            notes=[
                LeadNote("note_1", "2025-09-15", "Initial contact made. Sent introductory email."),
                LeadNote("note_2", "2025-09-17", "Followed up via phone call. Scheduled a demo for next week."),
            ],
        ),
        Lead(
            id="lead_002", name="Jane Doe", company="Innovate LLC", email="jane.d@innovate.com",
            status="New", value=12000, last_contact="2025-09-20", source="Referral",
            notes=[LeadNote("note_3", "2025-09-20", "Received referral from existing client. High priority.")],
        ),
        Lead(
            id="lead_003", name="Peter Jones", company="Solutions Inc.", email="peter.j@solutions.com",
            status="Qualified", value=7500, last_contact="2025-09-18", source="Cold Call",
            notes=[LeadNote("note_4", "2025-09-18", "Completed demo call. Interested in the premium package.")],
        ),
        Lead(
            id="lead_004", name="Mary Garcia", company="Tech Forward", email="m.garcia@techfwd.com",
            status="Lost", value=3000, last_contact="2025-09-05", source="Event",
        ),
        Lead(
            id="lead_005", name="David Miller", company="Global Solutions", email="david@globalsol.com",
            status="New", value=25000, last_contact="2025-09-21", source="Website",
        ),
    ]


def sample_contacts() -> list[Contact]:
    return [
        Contact("contact_001", "John Smith", "Acme Corp", "555-1234", "john@acme.com", ["Client", "Tech"]),
        Contact("contact_002", "Jane Doe", "Innovate LLC", "555-5678", "jane.d@innovate.com", ["Lead", "SaaS"]),
        Contact("contact_003", "Peter Jones", "Solutions Inc.", "555-8765", "peter.j@solutions.com", ["Client"]),
        Contact("contact_004", "Sarah Chen", "Data Systems", "555-4321", "sarah.c@datasys.com", ["Partner"]),
    ]


def sample_deals() -> list[Deal]:
    return [
        Deal("deal_001", "Acme Corp Website Redesign", "John Smith", "Acme Corp", 5000,
             DealStatus.PROPOSAL, "2025-10-15"),
        Deal("deal_002", "Innovate LLC SaaS Subscription", "Jane Doe", "Innovate LLC", 12000,
             DealStatus.NEGOTIATION, "2025-11-01"),
        Deal("deal_003", "Solutions Inc. Consulting Retainer", "Peter Jones", "Solutions Inc.", 7500,
             DealStatus.CLOSED_WON, "2025-09-20"),
        Deal("deal_004", "Tech Forward Marketing Campaign", "Mary Garcia", "Tech Forward", 3000,
             DealStatus.CLOSED_LOST, "2025-09-10"),
        Deal("deal_005", "Global Solutions Cloud Migration", "David Miller", "Global Solutions", 25000,
             DealStatus.NEW, "2025-12-01"),
    ]


def sample_tasks(today: date) -> list[Task]:
    def day(offset: int) -> str:
        return (today + timedelta(days=offset)).isoformat()

    return [
        Task("task_001", "Follow up with John Smith", day(1), "10:00", False,
             "Deal: Acme Corp Website Redesign", TaskPriority.HIGH, ReminderOffset.ONE_HOUR),
        Task("task_002", "Prepare proposal for Innovate LLC", day(0), "14:30", False,
             "Deal: Innovate LLC SaaS Subscription", TaskPriority.HIGH, ReminderOffset.FIFTEEN_MINUTES),
        Task("task_003", "Send invoice to Solutions Inc.", day(-2), None, True,
             "Deal: Solutions Inc. Consulting Retainer", TaskPriority.LOW, ReminderOffset.NONE),
        Task("task_004", "Schedule demo with David Miller", day(3), None, False,
             "Lead: David Miller", TaskPriority.MEDIUM, ReminderOffset.ONE_DAY),
        Task("task_005", "Research new leads", day(5), None, False,
             "General", TaskPriority.LOW, ReminderOffset.NONE),
    ]
