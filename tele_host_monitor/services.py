"""Business logic services shared by the bot handlers and background loops."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from . import alerting, geo, metrics, report
from .timeutil import format_timestamp, now_utc

if TYPE_CHECKING:
    from .config import Settings


async def generate_report(settings: Settings) -> str:
    snapshot, location = await asyncio.gather(
        metrics.collect_snapshot(), geo.resolve_location()
    )
    return report.build_report(snapshot, location, settings)


async def breach_notice(settings: Settings) -> str | None:
    """Alert text for every metric above threshold right now, or None.

    Unlike the realtime loop this does not consult or change the alert
    engine, so a breach is reported even if it already fired earlier.
    """
    cpu, (_, _, mem_pct) = await asyncio.gather(
        metrics.get_cpu_percent(), metrics.get_memory()
    )
    items = alerting.breaches(cpu, mem_pct, settings)
    if not items:
        return None
    return alerting.format_breach_notice(items, format_timestamp(now_utc()))
