"""Error taxonomy for tele_host_monitor."""

from __future__ import annotations


class MonitorError(Exception):
    """Base class for all agent errors."""


class ConfigError(MonitorError):
    """Missing or invalid configuration; fatal at startup."""


class RetrievalError(MonitorError):
    """A metric or geolocation source failed or timed out."""


class ScheduleParseError(MonitorError):
    """The configured report time is not a valid HH:MM value."""


class DeliveryError(MonitorError):
    """A notification could not be delivered."""
