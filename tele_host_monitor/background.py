"""Background jobs (started once per Application)."""
from __future__ import annotations

import asyncio
import logging

from telegram.ext import Application

from .notifier import Notifier
from .realtime import realtime_loop
from .scheduler import report_loop
from .state import BOT_STATE_KEY, BotState

logger = logging.getLogger(__name__)

_TASK_SCHEDULED_REPORT = "scheduled_report"
_TASK_REALTIME_ALERTS = "realtime_alerts"


def _get_state(app: Application) -> BotState:
    return app.bot_data[BOT_STATE_KEY]


def _running(task: object) -> bool:
    return isinstance(task, asyncio.Task) and not task.done()


def ensure_started(app: Application) -> None:
    state = _get_state(app)
    notifier = Notifier(app.bot, state.settings.CHAT_ID)

    if not _running(state.tasks.get(_TASK_SCHEDULED_REPORT)):
        state.tasks[_TASK_SCHEDULED_REPORT] = asyncio.create_task(
            report_loop(notifier, state.settings), name=_TASK_SCHEDULED_REPORT
        )
    if not _running(state.tasks.get(_TASK_REALTIME_ALERTS)):
        state.tasks[_TASK_REALTIME_ALERTS] = asyncio.create_task(
            realtime_loop(state.alerts, notifier, state.settings),
            name=_TASK_REALTIME_ALERTS,
        )


async def stop(app: Application) -> None:
    """Cancel background loops and wait for them to finish."""
    state = _get_state(app)
    tasks = [t for t in state.tasks.values() if isinstance(t, asyncio.Task)]
    for task in tasks:
        task.cancel()
    results = await asyncio.gather(*tasks, return_exceptions=True)
    for task, result in zip(tasks, results):
        if isinstance(result, Exception):
            logger.warning("Background task %s ended with error: %s", task.get_name(), result)
    state.tasks.clear()
    logger.info("Stopped %d background task(s)", len(tasks))
    firing = sorted(metric for metric, on in state.alerts.snapshot().items() if on)
    if firing:
        logger.info("Alerts still firing at shutdown: %s", ", ".join(firing))
