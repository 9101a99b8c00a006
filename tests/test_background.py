import asyncio
import logging

import pytest

from conftest import DummyApplication
from tele_host_monitor import background
from tele_host_monitor.config import Settings
from tele_host_monitor.state import BOT_STATE_KEY


@pytest.mark.asyncio
async def test_loops_start_once_and_stop(monkeypatch, settings: Settings) -> None:
    started: list[str] = []

    async def fake_report_loop(notifier, cfg) -> None:
        started.append("report")
        await asyncio.Event().wait()

    async def fake_realtime_loop(engine, notifier, cfg) -> None:
        started.append("realtime")
        await asyncio.Event().wait()

    monkeypatch.setattr(background, "report_loop", fake_report_loop)
    monkeypatch.setattr(background, "realtime_loop", fake_realtime_loop)
    app = DummyApplication(settings)
    state = app.bot_data[BOT_STATE_KEY]

    background.ensure_started(app)
    tasks = dict(state.tasks)
    background.ensure_started(app)
    await asyncio.sleep(0)

    assert state.tasks == tasks
    assert sorted(started) == ["realtime", "report"]

    await background.stop(app)

    assert state.tasks == {}
    assert all(t.cancelled() for t in tasks.values())


@pytest.mark.asyncio
async def test_stop_logs_alerts_still_firing(settings: Settings, caplog) -> None:
    app = DummyApplication(settings)
    state = app.bot_data[BOT_STATE_KEY]
    state.alerts.evaluate("mem", 95.0, 80)
    state.alerts.evaluate("cpu", 10.0, 80)

    with caplog.at_level(logging.INFO, logger="tele_host_monitor.background"):
        await background.stop(app)

    assert "Alerts still firing at shutdown: mem" in caplog.text
