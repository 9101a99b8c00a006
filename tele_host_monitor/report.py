"""Status report rendering (Telegram Markdown).

The layout is consumed as-is by existing chats and screens, so spacing,
glyphs and number formats must stay exactly as they are.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models.snapshot import LocationInfo, MetricSnapshot
from .timeutil import format_timestamp

if TYPE_CHECKING:
    from .config import Settings

MB = 1024 * 1024
GB = 1024 * 1024 * 1024
DISK_ALERT_PERCENT = 80

ICON_OK = "💚"
ICON_ALERT = "🔴"


def mask_ip(ip: str) -> str:
    """Hide all but the tail of an address.

    >>> mask_ip("203.0.113.77")
    'x.x.x.77'
    >>> mask_ip("2001:db8::1")
    '...2001db81'
    """
    if ip.count(".") == 3:
        return "x.x.x." + ip.split(".")[3]
    if ":" in ip:
        stripped = ip.replace(":", "")
        if len(stripped) > 8:
            return "..." + stripped[-8:]
        return "..." + stripped
    return ip


def format_uptime(seconds: int) -> str:
    days, rem = divmod(int(seconds), 86400)
    hours, rem = divmod(rem, 3600)
    minutes = rem // 60
    if days > 0:
        return f"{days}天{hours}小时{minutes}分钟"
    if hours > 0:
        return f"{hours}小时{minutes}分钟"
    return f"{minutes}分钟"


def status_icon(value: float, threshold: float) -> str:
    return ICON_ALERT if value > threshold else ICON_OK


def build_report(
    snapshot: MetricSnapshot, location: LocationInfo, settings: Settings
) -> str:
    s = snapshot
    lines = [
        f"🌍 *服务器位置*: {location.location} ({mask_ip(location.ip)})",
        f"🕐 *更新时间*: {format_timestamp(s.timestamp)}",
        "",
        f"{status_icon(s.cpu_percent, settings.CPU_THRESHOLD)} "
        f"*CPU 使用率*: {s.cpu_percent:.1f}%",
        f"{status_icon(s.mem_percent, settings.MEM_THRESHOLD)} "
        f"*内存使用*: {s.mem_used / MB:.1f}MB/{s.mem_total / MB:.1f}MB "
        f"({s.mem_percent:.1f}%)",
        f"{status_icon(s.disk_percent, DISK_ALERT_PERCENT)} "
        f"*磁盘使用*: {s.disk_used / GB:.1f}GB/{s.disk_total / GB:.1f}GB "
        f"({s.disk_percent:.1f}%)",
        f"📊 *网络流量*: ↓{s.net_recv / GB:.2f}GB ↑{s.net_sent / GB:.2f}GB",
        "",
        "🖥️ *系统信息*:",
        f"• 系统: {s.platform}",
        f"• 运行时间: {format_uptime(s.uptime_s)}",
        "",
        settings.CUSTOM_MESSAGE,
    ]
    return "\n".join(lines) + "\n"
