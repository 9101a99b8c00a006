import json
import logging
import subprocess
import sys
from pathlib import Path

import pytest

from tele_host_monitor import config
from tele_host_monitor.errors import ConfigError

BASE_ENV = {"BOT_TOKEN": "123:ABC", "CHAT_ID": "42"}


def test_settings_defaults(tmp_path) -> None:
    settings = config._read_settings(BASE_ENV, tmp_path / "missing.json")
    assert settings.BOT_TOKEN == "123:ABC"
    assert settings.CHAT_ID == 42
    assert settings.REPORT_TIME == "15:00"
    assert settings.CUSTOM_MESSAGE == "🖥️ 服务器状态报告"
    assert settings.CPU_THRESHOLD == 80
    assert settings.MEM_THRESHOLD == 80


def test_env_overrides_file(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "bot_token": "file-token",
                "chat_id": 7,
                "report_time": "09:30",
                "cpu_threshold": 70,
                "custom_message": "from file",
            }
        ),
        encoding="utf-8",
    )
    settings = config._read_settings({"CPU_THRESHOLD": "90"}, path)
    assert settings.BOT_TOKEN == "file-token"
    assert settings.CHAT_ID == 7
    assert settings.REPORT_TIME == "09:30"
    assert settings.CPU_THRESHOLD == 90
    assert settings.MEM_THRESHOLD == 80
    assert settings.CUSTOM_MESSAGE == "from file"


def test_config_file_env_var(tmp_path) -> None:
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"mem_threshold": 65}), encoding="utf-8")
    settings = config._read_settings({**BASE_ENV, "CONFIG_FILE": str(path)})
    assert settings.MEM_THRESHOLD == 65


def test_broken_file_is_ignored(tmp_path, caplog) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        settings = config._read_settings(BASE_ENV, path)
    assert settings.CHAT_ID == 42
    assert "Failed to parse" in caplog.text


@pytest.mark.parametrize(
    "env",
    [
        {"CHAT_ID": "42"},
        {"BOT_TOKEN": "123:ABC"},
        {"BOT_TOKEN": "123:ABC", "CHAT_ID": "abc"},
        {"BOT_TOKEN": "123:ABC", "CHAT_ID": "0"},
        {**BASE_ENV, "CPU_THRESHOLD": "101"},
        {**BASE_ENV, "MEM_THRESHOLD": "-1"},
        {**BASE_ENV, "CPU_THRESHOLD": "high"},
    ],
)
def test_invalid_settings_raise(tmp_path, env) -> None:
    with pytest.raises(ConfigError):
        config._read_settings(env, tmp_path / "missing.json")


def test_load_settings_warns_on_bad_report_time(tmp_path, caplog) -> None:
    env = {**BASE_ENV, "REPORT_TIME": "25:99"}
    with caplog.at_level(logging.WARNING):
        settings = config.load_settings(env, tmp_path / "missing.json")
    assert settings.REPORT_TIME == "25:99"
    assert "retry every minute" in caplog.text


def test_load_settings_warns_on_low_threshold(tmp_path, caplog) -> None:
    env = {**BASE_ENV, "CPU_THRESHOLD": "5"}
    with caplog.at_level(logging.WARNING):
        settings = config.load_settings(env, tmp_path / "missing.json")
    assert settings.CPU_THRESHOLD == 5
    assert "CPU_THRESHOLD=5" in caplog.text


def test_config_import_stays_light() -> None:
    code = (
        "import sys, tele_host_monitor.config; "
        "loaded = [m for m in ('scheduler', 'services', 'metrics', 'geo') "
        "if 'tele_host_monitor.' + m in sys.modules]; "
        "assert not loaded, loaded"
    )
    result = subprocess.run(
        [sys.executable, "-c", code],
        cwd=Path(__file__).resolve().parents[1],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr
