"""Central configuration for tele_host_monitor.

Values are layered: built-in defaults, then an optional JSON file, then
environment variables.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .errors import ConfigError, ScheduleParseError
from .timeutil import parse_report_time

logger = logging.getLogger(__name__)

DEFAULT_REPORT_TIME = "15:00"
DEFAULT_CUSTOM_MESSAGE = "🖥️ 服务器状态报告"
DEFAULT_THRESHOLD = 80
DEFAULT_CONFIG_FILE = "config.json"

# file key -> environment variable
_ENV_KEYS: dict[str, str] = {
    "bot_token": "BOT_TOKEN",
    "chat_id": "CHAT_ID",
    "report_time": "REPORT_TIME",
    "custom_message": "CUSTOM_MESSAGE",
    "cpu_threshold": "CPU_THRESHOLD",
    "mem_threshold": "MEM_THRESHOLD",
}


@dataclass(frozen=True)
class Settings:
    """Configuration settings for tele_host_monitor."""

    BOT_TOKEN: str
    CHAT_ID: int
    REPORT_TIME: str = DEFAULT_REPORT_TIME
    CUSTOM_MESSAGE: str = DEFAULT_CUSTOM_MESSAGE
    CPU_THRESHOLD: int = DEFAULT_THRESHOLD
    MEM_THRESHOLD: int = DEFAULT_THRESHOLD


def _read_file(path: Path) -> dict[str, Any]:
    """Read the JSON config file.

    Returns an empty mapping when the file does not exist. A file that
    cannot be parsed is logged and ignored, matching how the agent has
    always treated a broken ``config.json``.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        logger.warning("Failed to read %s: %s", path, e)
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: top-level value must be an object", path)
        return {}
    return data


def _merge(file_values: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    merged: dict[str, Any] = {
        "report_time": DEFAULT_REPORT_TIME,
        "custom_message": DEFAULT_CUSTOM_MESSAGE,
        "cpu_threshold": DEFAULT_THRESHOLD,
        "mem_threshold": DEFAULT_THRESHOLD,
    }
    for key in _ENV_KEYS:
        if file_values.get(key) not in (None, ""):
            merged[key] = file_values[key]
    for key, env_name in _ENV_KEYS.items():
        value = env.get(env_name)
        if value:
            merged[key] = value
    return merged


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


def _as_threshold(name: str, value: Any) -> int:
    threshold = _as_int(name, value)
    if not 0 <= threshold <= 100:
        raise ConfigError(f"{name} must be between 0 and 100, got {threshold}")
    return threshold


def _read_settings(
    env: Mapping[str, str] | None = None, path: str | Path | None = None
) -> Settings:
    """Build Settings from defaults, the JSON file and the environment.

    Args:
        env: Environment mapping, defaults to ``os.environ``.
        path: Config file path; defaults to ``$CONFIG_FILE`` or ``config.json``.

    Raises:
        ConfigError: required values are missing or a value is invalid.
    """
    env = os.environ if env is None else env
    if path is None:
        path = env.get("CONFIG_FILE") or DEFAULT_CONFIG_FILE
    values = _merge(_read_file(Path(path)), env)

    token = str(values.get("bot_token") or "").strip()
    if not token:
        raise ConfigError("BOT_TOKEN must be set")
    if values.get("chat_id") in (None, ""):
        raise ConfigError("CHAT_ID must be set")
    chat_id = _as_int("CHAT_ID", values["chat_id"])
    if chat_id == 0:
        raise ConfigError("CHAT_ID must be set")

    return Settings(
        BOT_TOKEN=token,
        CHAT_ID=chat_id,
        REPORT_TIME=str(values["report_time"]).strip(),
        CUSTOM_MESSAGE=str(values["custom_message"]),
        CPU_THRESHOLD=_as_threshold("CPU_THRESHOLD", values["cpu_threshold"]),
        MEM_THRESHOLD=_as_threshold("MEM_THRESHOLD", values["mem_threshold"]),
    )


def validate_settings(settings: Settings) -> None:
    """Log warnings for settings that are usable but suspicious."""
    try:
        parse_report_time(settings.REPORT_TIME)
    except ScheduleParseError as e:
        logger.warning("%s; scheduled reports will retry every minute", e)
    for name, threshold in (
        ("CPU_THRESHOLD", settings.CPU_THRESHOLD),
        ("MEM_THRESHOLD", settings.MEM_THRESHOLD),
    ):
        if threshold < 10:
            logger.warning(
                "%s=%d: alerts only clear once the value drops to 0", name, threshold
            )


def load_settings(
    env: Mapping[str, str] | None = None, path: str | Path | None = None
) -> Settings:
    settings = _read_settings(env, path)
    validate_settings(settings)
    return settings
