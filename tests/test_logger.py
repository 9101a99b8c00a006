import logging

from tele_host_monitor.logger import setup_logging


def test_setup_logging_sets_level_and_quiets_http(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    root = logging.getLogger()
    old_level = root.level
    try:
        setup_logging()
        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
        setup_logging("warning")
        assert root.level == logging.WARNING
    finally:
        root.setLevel(old_level)
