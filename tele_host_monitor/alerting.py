"""Threshold alerting with a fixed hysteresis band.

An alert fires when a metric rises above its threshold and only re-arms once
the metric has dropped ``HYSTERESIS_GAP`` points below it, so a value
hovering around the threshold does not flap.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import TYPE_CHECKING

from .models.alerts import Breach, Transition

if TYPE_CHECKING:
    from .config import Settings

logger = logging.getLogger(__name__)

HYSTERESIS_GAP = 10

METRIC_LABELS: dict[str, str] = {
    "cpu": "CPU",
    "mem": "内存",
}

# Scheduled breach notice labels differ in spacing from the realtime ones.
_BREACH_LABELS: dict[str, str] = {
    "cpu": "CPU 使用率过高",
    "mem": "内存使用率过高",
}


def clear_boundary(threshold: float) -> float:
    """Value at or below which a firing alert clears (never below 0)."""
    return max(threshold - HYSTERESIS_GAP, 0)


class AlertEngine:
    """Per-metric firing flags guarded by a lock.

    Both the realtime loop and on-demand callers may evaluate metrics; all
    reads and writes of the flag map go through ``_lock``.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._firing: dict[str, bool] = {}

    def evaluate(self, metric: str, value: float, threshold: float) -> Transition:
        with self._lock:
            firing = self._firing.get(metric, False)
            if value > threshold and not firing:
                self._firing[metric] = True
                return Transition.FIRED
            if value <= clear_boundary(threshold) and firing:
                self._firing[metric] = False
                return Transition.CLEARED
            return Transition.NONE

    def snapshot(self) -> dict[str, bool]:
        with self._lock:
            return dict(self._firing)


def breaches(cpu_percent: float, mem_percent: float, settings: Settings) -> list[Breach]:
    """Metrics currently above threshold, independent of any firing state."""
    out: list[Breach] = []
    if cpu_percent > settings.CPU_THRESHOLD:
        out.append(Breach("cpu", cpu_percent, settings.CPU_THRESHOLD))
    if mem_percent > settings.MEM_THRESHOLD:
        out.append(Breach("mem", mem_percent, settings.MEM_THRESHOLD))
    return out


def format_fired_message(metric: str, value: float) -> str:
    label = METRIC_LABELS.get(metric, metric)
    return f"🚨 *{label}告警*: 使用率达到 {value:.1f}%"


def format_breach_notice(items: list[Breach], timestamp: str) -> str:
    lines = [
        f"🔴 {_BREACH_LABELS.get(b.metric, b.metric)}: {b.value:.1f}%" for b in items
    ]
    return "⚠️ *服务器告警通知*\n\n" + "\n".join(lines) + f"\n\n时间: {timestamp}"
