"""Task reminder scheduling.

``ReminderScheduler.poll`` decides which task reminders are due and delivers
each at most once per session. The set of fired task ids is owned by the
caller: it goes in on every poll and comes back out, replaced only when a
reminder actually fired. ``ReminderTimer`` drives the poll on a fixed
period on the running asyncio loop.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable, Iterable

from nexora.models import Task
from nexora.notifier import Notifier, Permission
from nexora.timeutil import due_instant, reminder_offset

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 30.0


class ReminderScheduler:
    def __init__(self, notifier: Notifier) -> None:
        self.notifier = notifier
        self.permission: Permission | None = None

    @property
    def enabled(self) -> bool:
        return self.permission == Permission.GRANTED

    def start(self) -> Permission:
        """Ask for notification permission. Only the first call asks."""
        if self.permission is not None:
            return self.permission
        try:
            self.permission = Permission(self.notifier.request_permission())
        except Exception:
            logger.exception("Requesting notification permission failed")
            self.permission = Permission.UNKNOWN
        if not self.enabled:
            logger.warning(
                "Notification permission was not granted (%s). Task reminders will not be shown.",
                self.permission.value,
            )
        return self.permission

    def poll(self, tasks: Iterable[Task], fired: frozenset[str], now: datetime) -> frozenset[str]:
        """Deliver every reminder that is due at ``now`` and not yet fired.

        Returns ``fired`` itself when nothing was delivered, otherwise a new
        set including the newly fired task ids.
        """
        if not self.enabled:
            return fired

        newly_fired: list[str] = []
        for task in tasks:
            if task.completed or task.id in fired or task.id in newly_fired:
                continue
            offset = reminder_offset(task.reminder)
            if offset is None:
                continue
            try:
                due = due_instant(task, now.tzinfo)
            except ValueError:
                logger.debug("Skipping task %s with malformed due date/time", task.id, exc_info=True)
                continue

            if due - offset <= now <= due:
                self._deliver(task)
                newly_fired.append(task.id)

        if not newly_fired:
            return fired
        logger.info("Fired %d task reminder(s): %s", len(newly_fired), ", ".join(newly_fired))
        return fired | frozenset(newly_fired)

    def _deliver(self, task: Task) -> None:
        try:
            self.notifier.deliver_reminder(task)
        except Exception:
            logger.exception("Delivering reminder for task %s failed", task.id)


class ReminderTimer:
    """Runs ``tick`` every ``interval`` seconds until stopped."""

    def __init__(self, tick: Callable[[], None], interval: float = DEFAULT_INTERVAL) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.tick = tick
        self.interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.tick()
            except Exception:
                logger.exception("Reminder poll failed")
