"""Fixed UTC+8 clock helpers.

All report times are computed against a constant offset rather than a named
zone, so the schedule does not depend on the host locale or DST rules.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from .errors import ScheduleParseError

REPORT_TZ = timezone(timedelta(hours=8), "CST")
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_REPORT_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def to_report_tz(moment: datetime) -> datetime:
    # naive values are taken as UTC, never as host-local time
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(REPORT_TZ)


def format_timestamp(moment: datetime) -> str:
    return to_report_tz(moment).strftime(TIMESTAMP_FORMAT)


def parse_report_time(raw: str) -> tuple[int, int]:
    """Parse ``H:MM`` / ``HH:MM`` (24h) into (hour, minute).

    Raises:
        ScheduleParseError: the value is not a valid time of day.
    """
    match = _REPORT_TIME_RE.match((raw or "").strip())
    if not match:
        raise ScheduleParseError(f"invalid report time {raw!r}, expected HH:MM")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ScheduleParseError(f"invalid report time {raw!r}, out of range")
    return hour, minute
