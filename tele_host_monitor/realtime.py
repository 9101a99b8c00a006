"""Realtime threshold polling driving the alert engine."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Awaitable, Callable

from . import metrics
from .alerting import AlertEngine, format_fired_message
from .models.alerts import Transition

if TYPE_CHECKING:
    from .config import Settings
    from .notifier import Notifier

logger = logging.getLogger(__name__)

POLL_INTERVAL_S = 2.0


async def poll_once(
    engine: AlertEngine, notifier: Notifier, settings: Settings
) -> dict[str, Transition]:
    cpu, (_, _, mem_pct) = await asyncio.gather(
        metrics.get_cpu_percent(), metrics.get_memory()
    )
    transitions: dict[str, Transition] = {}
    for metric, value, threshold in (
        ("cpu", cpu, settings.CPU_THRESHOLD),
        ("mem", mem_pct, settings.MEM_THRESHOLD),
    ):
        transition = engine.evaluate(metric, value, threshold)
        transitions[metric] = transition
        if transition is Transition.FIRED:
            logger.info("%s alert fired at %.1f%%", metric, value)
            await notifier.send(format_fired_message(metric, value))
        elif transition is Transition.CLEARED:
            logger.info("%s alert cleared at %.1f%%", metric, value)
    return transitions


async def realtime_loop(
    engine: AlertEngine,
    notifier: Notifier,
    settings: Settings,
    *,
    interval_s: float = POLL_INTERVAL_S,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> None:
    logger.info("Starting realtime alert loop (interval=%ss)", interval_s)
    while True:
        try:
            start = time.monotonic()
            await poll_once(engine, notifier, settings)
            elapsed = time.monotonic() - start
            await sleep(max(0.0, interval_s - elapsed))
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Realtime alert loop error")
            await sleep(interval_s)
