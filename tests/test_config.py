from __future__ import annotations

import io

import pytest
from rich.console import Console

from nexora.config import get_settings
from nexora.models import Task
from nexora.notifier import ConsoleNotifier, NullNotifier, Permission, make_notifier


def test_default_settings(monkeypatch):
    for name in ("NEXORA_REMINDER_INTERVAL", "NEXORA_NOTIFIER", "NEXORA_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.reminder_interval == 30.0
    assert settings.notifier == "console"
    assert settings.log_level == "INFO"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("NEXORA_REMINDER_INTERVAL", "5")
    monkeypatch.setenv("NEXORA_NOTIFIER", "None")
    monkeypatch.setenv("NEXORA_LOG_LEVEL", "debug")
    settings = get_settings()
    assert settings.reminder_interval == 5.0
    assert settings.notifier == "none"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["soon", "0", "-3"])
def test_invalid_interval(monkeypatch, value):
    monkeypatch.setenv("NEXORA_REMINDER_INTERVAL", value)
    with pytest.raises(ValueError):
        get_settings()


def test_make_notifier():
    assert isinstance(make_notifier("console"), ConsoleNotifier)
    assert isinstance(make_notifier("none"), NullNotifier)
    with pytest.raises(ValueError):
        make_notifier("carrier-pigeon")


def test_make_notifier_uses_given_console():
    console = Console(file=io.StringIO())
    assert make_notifier("console", console).console is console


def test_console_notifier_prints_reminder():
    out = io.StringIO()
    notifier = ConsoleNotifier(Console(file=out, width=80))
    assert notifier.request_permission() == Permission.GRANTED

    notifier.deliver_reminder(Task(id="t1", title="Call Jane"))

    text = out.getvalue()
    assert "Nexora CRM Task Reminder" in text
    assert 'Reminder: "Call Jane" is due soon.' in text


def test_null_notifier_has_no_permission():
    assert NullNotifier().request_permission() == Permission.UNKNOWN
