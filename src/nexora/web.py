from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import date, datetime

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from nexora.config import Settings, get_settings
from nexora.notifier import Notifier, make_notifier
from nexora.routes import assistant, crm, notifications, tasks
from nexora.services.reminders import ReminderScheduler, ReminderTimer
from nexora.store import CRMStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: CRMStore | None = None,
    notifier: Notifier | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    store = store or CRMStore.from_sample(date.today())
    store.refresh_notifications(datetime.now())

    scheduler = ReminderScheduler(notifier or make_notifier(settings.notifier))
    timer = ReminderTimer(
        lambda: store.check_reminders(scheduler, datetime.now()),
        interval=settings.reminder_interval,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        scheduler.start()
        timer.start()
        logger.info("Reminder checks every %.0fs", timer.interval)
        try:
            yield
        finally:
            await timer.stop()

    app = FastAPI(title="Nexora CRM", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.scheduler = scheduler
    app.state.timer = timer

    app.include_router(notifications.router)
    app.include_router(tasks.router)
    app.include_router(crm.router)
    app.include_router(assistant.router)

    @app.get("/")
    async def index():
        return RedirectResponse(url="/dashboard", status_code=302)

    return app
