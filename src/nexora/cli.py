from __future__ import annotations

from dotenv import load_dotenv

load_dotenv()

import asyncio
from datetime import date, datetime
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from nexora.config import configure_logging, get_settings
from nexora.models import TaskPriority
from nexora.notifier import make_notifier
from nexora.services.reminders import ReminderScheduler, ReminderTimer
from nexora.store import CRMStore
from nexora.timeutil import time_since

app = typer.Typer(help="Nexora CRM")
console = Console()


@app.callback()
def main() -> None:
    configure_logging(get_settings().log_level)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host to bind to"),
    port: int = typer.Option(8000, help="Port to bind to"),
    reload: bool = typer.Option(False, help="Enable auto-reload"),
) -> None:
    """Start the Nexora web API."""
    import uvicorn

    uvicorn.run("nexora.web:create_app", host=host, port=port, reload=reload, factory=True)


@app.command()
def notifications() -> None:
    """Show the notification feed for the sample data."""
    now = datetime.now()
    store = CRMStore.from_sample(date.today())
    feed = store.refresh_notifications(now)

    table = Table(title=f"Notifications ({store.unread_notifications} unread)")
    table.add_column("", style="magenta")
    table.add_column("Type", style="cyan")
    table.add_column("Message", style="white")
    table.add_column("When", style="dim")
    for n in feed:
        table.add_row("" if n.read else "●", n.category.value, n.message, time_since(n.timestamp, now))
    console.print(table)


@app.command()
def tasks(
    priority: Optional[TaskPriority] = typer.Option(None, help="Only show this priority"),
    search: str = typer.Option("", help="Filter by title or related record"),
    sort: str = typer.Option("dueDate", help="dueDate or priority"),
) -> None:
    """List tasks with their reminder settings."""
    store = CRMStore.from_sample(date.today())
    rows = store.list_tasks(priority=priority, search=search, sort=sort)
    if not rows:
        console.print("[green]No matching tasks.[/green]")
        return

    table = Table(title="Tasks & Reminders")
    table.add_column("Title", style="cyan")
    table.add_column("Due", style="yellow")
    table.add_column("Priority", style="magenta")
    table.add_column("Reminder", style="white")
    table.add_column("Related To", style="dim")
    for t in rows:
        due = f"{t.due_date} {t.due_time}" if t.due_time else t.due_date
        title = f"[strike]{t.title}[/strike]" if t.completed else t.title
        reminder = t.reminder.value if t.reminder else "none"
        table.add_row(title, due, t.priority.value, reminder, t.related_to)
    console.print(table)


@app.command()
def remind() -> None:
    """Run a single reminder check against the sample tasks."""
    store = CRMStore.from_sample(date.today())
    scheduler = ReminderScheduler(make_notifier(get_settings().notifier, console))
    scheduler.start()
    fired = store.check_reminders(scheduler, datetime.now())
    if not fired:
        console.print("[green]No reminders due right now.[/green]")


@app.command()
def watch(
    interval: Optional[float] = typer.Option(None, help="Seconds between checks"),
) -> None:
    """Keep checking task reminders until interrupted."""
    settings = get_settings()
    store = CRMStore.from_sample(date.today())
    scheduler = ReminderScheduler(make_notifier(settings.notifier, console))

    async def run() -> None:
        scheduler.start()
        timer = ReminderTimer(
            lambda: store.check_reminders(scheduler, datetime.now()),
            interval=interval or settings.reminder_interval,
        )
        timer.start()
        console.print(f"Checking reminders every {timer.interval:.0f}s. Press Ctrl+C to stop.")
        try:
            await asyncio.Event().wait()
        finally:
            await timer.stop()

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        console.print("Stopped.")
