"""Metric snapshot and location dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

UNKNOWN = "未知"


@dataclass(frozen=True)
class MetricSnapshot:
    timestamp: datetime
    cpu_percent: float = 0.0
    mem_used: int = 0
    mem_total: int = 0
    mem_percent: float = 0.0
    disk_used: int = 0
    disk_total: int = 0
    disk_percent: float = 0.0
    net_sent: int = 0
    net_recv: int = 0
    platform: str = ""
    uptime_s: int = 0


@dataclass(frozen=True)
class LocationInfo:
    ip: str = UNKNOWN
    location: str = UNKNOWN
    country: str = ""
