from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol

from rich.console import Console
from rich.panel import Panel

from nexora.models import Task

logger = logging.getLogger(__name__)

REMINDER_TITLE = "Nexora CRM Task Reminder"


class Permission(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"
    UNKNOWN = "unknown"


class Notifier(Protocol):
    def request_permission(self) -> Permission: ...

    def deliver_reminder(self, task: Task) -> None: ...


def reminder_body(task: Task) -> str:
    return f'Reminder: "{task.title}" is due soon.'


class ConsoleNotifier:
    """Shows reminders out-of-band on the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    def request_permission(self) -> Permission:
        return Permission.GRANTED

    def deliver_reminder(self, task: Task) -> None:
        self.console.print(Panel(reminder_body(task), title=REMINDER_TITLE, border_style="yellow"))


class NullNotifier:
    """No out-of-band channel available; reminders are never shown."""

    def request_permission(self) -> Permission:
        return Permission.UNKNOWN

    def deliver_reminder(self, task: Task) -> None:
        logger.debug("Dropping reminder for task %s", task.id)


def make_notifier(name: str, console: Console | None = None) -> Notifier:
    if name == "console":
        return ConsoleNotifier(console)
    if name == "none":
        return NullNotifier()
    raise ValueError(f"Unknown notifier {name!r}; expected 'console' or 'none'")
