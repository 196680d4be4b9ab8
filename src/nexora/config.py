from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from nexora.services.reminders import DEFAULT_INTERVAL

load_dotenv()


@dataclass
class Settings:
    reminder_interval: float = DEFAULT_INTERVAL
    notifier: str = "console"
    log_level: str = "INFO"
    anthropic_api_key: str = ""


def get_settings() -> Settings:
    raw_interval = os.environ.get("NEXORA_REMINDER_INTERVAL", "")
    try:
        interval = float(raw_interval) if raw_interval else DEFAULT_INTERVAL
    except ValueError as exc:
        raise ValueError(f"NEXORA_REMINDER_INTERVAL must be a number, got {raw_interval!r}") from exc
    if interval <= 0:
        raise ValueError("NEXORA_REMINDER_INTERVAL must be positive")

    return Settings(
        reminder_interval=interval,
        notifier=os.environ.get("NEXORA_NOTIFIER", "console").strip().lower(),
        log_level=os.environ.get("NEXORA_LOG_LEVEL", "INFO").strip().upper(),
        anthropic_api_key=os.environ.get("ANTHROPIC_API_KEY", ""),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
