"""Logging helpers for tele_host_monitor
"""
from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# chatty third-party loggers (one line per getUpdates poll at INFO)
_QUIET_LOGGERS = ("httpx", "httpcore", "telegram", "urllib3")


def setup_logging(level_name: str | None = None) -> None:
    name = (level_name or os.environ.get("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, name, logging.INFO)

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
    root.setLevel(level)

    for noisy in _QUIET_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)


__all__ = ["setup_logging"]
