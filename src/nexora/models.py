from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class DealStatus(str, Enum):
    NEW = "New"
    PROPOSAL = "Proposal Sent"
    NEGOTIATION = "Negotiation"
    CLOSED_WON = "Closed - Won"
    CLOSED_LOST = "Closed - Lost"


class TaskPriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ReminderOffset(str, Enum):
    NONE = "none"
    FIVE_MINUTES = "5m"
    FIFTEEN_MINUTES = "15m"
    ONE_HOUR = "1h"
    ONE_DAY = "1d"


class NotificationCategory(str, Enum):
    LEAD = "lead"
    DEAL = "deal"
    TASK = "task"
    GENERAL = "general"


@dataclass
class LeadNote:
    id: str = ""
    date: str = ""
    note: str = ""


@dataclass
class Lead:
    id: str = ""
    name: str = ""
    company: str = ""
    email: str = ""
    status: str = "New"  # New, Contacted, Qualified or Lost
    value: float = 0
    last_contact: str = ""
    source: str = "Website"  # Website, Referral, Cold Call or Event
    notes: list[LeadNote] = field(default_factory=list)


@dataclass
class Contact:
    id: str = ""
    name: str = ""
    company: str = ""
    phone: str = ""
    email: str = ""
    tags: list[str] = field(default_factory=list)


@dataclass
class Deal:
    id: str = ""
    title: str = ""
    contact_name: str = ""
    company: str = ""
    value: float = 0
    status: DealStatus = DealStatus.NEW
    close_date: str = ""


@dataclass
class Task:
    id: str = ""
    title: str = ""
    due_date: str = ""  # YYYY-MM-DD
    due_time: str | None = None  # HH:MM, 24-hour
    completed: bool = False
    related_to: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    reminder: ReminderOffset | None = ReminderOffset.NONE


@dataclass(frozen=True)
class NotificationRecord:
    id: str
    message: str
    category: NotificationCategory
    timestamp: datetime
    read: bool = False
    related_id: str | None = None
