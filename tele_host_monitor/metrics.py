"""Host metric readers.

Every reader runs the blocking psutil call in a worker thread and bounds it
with a timeout. Failures degrade to zero values so a report can always be
rendered.
"""

from __future__ import annotations

import asyncio
import logging
import platform
import time
from typing import Callable, TypeVar

import psutil

from .errors import RetrievalError
from .models.snapshot import MetricSnapshot
from .timeutil import now_utc

logger = logging.getLogger(__name__)

T = TypeVar("T")

METRIC_TIMEOUT_S = 3.0
CPU_SAMPLE_S = 1.0
DISK_PATH = "/"


async def _bounded(fn: Callable[[], T], label: str, timeout: float = METRIC_TIMEOUT_S) -> T:
    try:
        return await asyncio.wait_for(asyncio.to_thread(fn), timeout=timeout)
    except asyncio.TimeoutError:
        raise RetrievalError(f"{label} timed out after {timeout:.0f}s") from None
    except Exception as e:
        raise RetrievalError(f"{label} failed: {e}") from e


async def get_cpu_percent() -> float:
    """CPU usage over a one second sample, 0.0 when unavailable."""
    try:
        return float(
            await _bounded(lambda: psutil.cpu_percent(interval=CPU_SAMPLE_S), "cpu")
        )
    except RetrievalError as e:
        logger.warning("%s", e)
        return 0.0


async def get_memory() -> tuple[int, int, float]:
    """Return (used, total, percent) for virtual memory."""
    try:
        vm = await _bounded(psutil.virtual_memory, "memory")
    except RetrievalError as e:
        logger.warning("%s", e)
        return 0, 0, 0.0
    return int(vm.used), int(vm.total), float(vm.percent)


async def get_disk(path: str = DISK_PATH) -> tuple[int, int, float]:
    """Return (used, total, percent) for the filesystem holding ``path``."""
    try:
        du = await _bounded(lambda: psutil.disk_usage(path), f"disk {path}")
    except RetrievalError as e:
        logger.warning("%s", e)
        return 0, 0, 0.0
    return int(du.used), int(du.total), float(du.percent)


async def get_net_counters() -> tuple[int, int]:
    """Return cumulative (bytes_sent, bytes_recv) across all interfaces."""
    try:
        io = await _bounded(lambda: psutil.net_io_counters(pernic=False), "network")
    except RetrievalError as e:
        logger.warning("%s", e)
        return 0, 0
    if io is None:
        return 0, 0
    return int(io.bytes_sent), int(io.bytes_recv)


def _platform_name() -> str:
    try:
        release = platform.freedesktop_os_release()
    except OSError:
        release = {}
    return release.get("ID") or platform.system().lower()


def _host_info() -> tuple[str, int]:
    uptime_s = max(0, int(time.time() - psutil.boot_time()))
    return _platform_name(), uptime_s


async def get_host_info() -> tuple[str, int]:
    """Return (platform, uptime seconds)."""
    try:
        return await _bounded(_host_info, "host")
    except RetrievalError as e:
        logger.warning("%s", e)
        return "", 0


async def collect_snapshot() -> MetricSnapshot:
    """Read every metric concurrently into a single snapshot."""
    timestamp = now_utc()
    cpu, mem, disk, net, host = await asyncio.gather(
        get_cpu_percent(),
        get_memory(),
        get_disk(),
        get_net_counters(),
        get_host_info(),
    )
    return MetricSnapshot(
        timestamp=timestamp,
        cpu_percent=cpu,
        mem_used=mem[0],
        mem_total=mem[1],
        mem_percent=mem[2],
        disk_used=disk[0],
        disk_total=disk[1],
        disk_percent=disk[2],
        net_sent=net[0],
        net_recv=net[1],
        platform=host[0],
        uptime_s=host[1],
    )
