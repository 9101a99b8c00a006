"""Daily report scheduling in a fixed UTC+8 offset."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Awaitable, Callable

from . import services
from .errors import ScheduleParseError
from .timeutil import TIMESTAMP_FORMAT, now_utc, parse_report_time, to_report_tz

if TYPE_CHECKING:
    from .config import Settings
    from .notifier import Notifier

logger = logging.getLogger(__name__)

PARSE_BACKOFF_S = 60.0


def next_report_at(now: datetime, report_time: str) -> datetime:
    """Next report instant (UTC+8) strictly after ``now``.

    When ``now`` is at or past today's report time the target moves to the
    same wall-clock time tomorrow, which is always exactly 24 hours later
    because the offset is fixed.
    """
    hour, minute = parse_report_time(report_time)
    local_now = to_report_tz(now)
    target = local_now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if local_now >= target:
        target += timedelta(days=1)
    return target


async def run_report_cycle(notifier: Notifier, settings: Settings) -> None:
    text = await services.generate_report(settings)
    await notifier.send(text)
    notice = await services.breach_notice(settings)
    if notice:
        await notifier.send(notice)


async def report_loop(
    notifier: Notifier,
    settings: Settings,
    *,
    clock: Callable[[], datetime] = now_utc,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> None:
    logger.info("Starting scheduled report loop (report_time=%s)", settings.REPORT_TIME)
    while True:
        try:
            now = clock()
            try:
                target = next_report_at(now, settings.REPORT_TIME)
            except ScheduleParseError as e:
                logger.error("%s; retrying in %.0fs", e, PARSE_BACKOFF_S)
                await sleep(PARSE_BACKOFF_S)
                continue

            wait_s = max(0.0, (target - now).total_seconds())
            logger.info(
                "Next report at %s (in %.0fs)", target.strftime(TIMESTAMP_FORMAT), wait_s
            )
            await sleep(wait_s)
            await run_report_cycle(notifier, settings)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Scheduled report cycle failed")
            await sleep(PARSE_BACKOFF_S)
