"""Bot runtime state (settings, alert engine, background tasks)."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..alerting import AlertEngine
from ..config import Settings

BOT_STATE_KEY = "state"


@dataclass
class BotState:
    """Runtime state shared by handlers and background loops."""

    settings: Settings
    alerts: AlertEngine = field(default_factory=AlertEngine)
    tasks: dict[str, object] = field(default_factory=dict)
