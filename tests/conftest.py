"""Shared test fixtures and dummy classes."""

from __future__ import annotations

from typing import Any

import pytest
import requests

from tele_host_monitor.config import Settings
from tele_host_monitor.state import BOT_STATE_KEY, BotState

CHAT_ID = 42


class DummyChat:
    """Dummy Telegram chat for testing."""

    def __init__(self, chat_id: int) -> None:
        self.id = chat_id
        self.sent: list[str] = []

    async def send_message(self, text: str) -> None:
        self.sent.append(text)


class DummyMessage:
    """Dummy Telegram message for testing."""

    def __init__(self) -> None:
        self.replies: list[tuple[str, dict[str, Any]]] = []

    async def reply_text(self, text: str, **kwargs: Any) -> None:
        self.replies.append((text, kwargs))


class DummyQuery:
    """Dummy callback query for testing."""

    def __init__(self, data: str, error: Exception | None = None) -> None:
        self.data = data
        self.answered = False
        self.edits: list[tuple[str, dict[str, Any]]] = []
        self._error = error

    async def answer(self) -> None:
        self.answered = True

    async def edit_message_text(self, text: str, **kwargs: Any) -> None:
        if self._error is not None:
            raise self._error
        self.edits.append((text, kwargs))


class DummyUpdate:
    """Dummy Telegram update for testing."""

    def __init__(self, chat_id: int = CHAT_ID, query: DummyQuery | None = None) -> None:
        self.effective_chat = DummyChat(chat_id)
        self.message = DummyMessage()
        self.callback_query = query


class DummyApplication:
    """Dummy Telegram application for testing."""

    def __init__(self, settings: Settings) -> None:
        self.bot = object()
        self.bot_data: dict[str, object] = {BOT_STATE_KEY: BotState(settings=settings)}


class DummyContext:
    """Dummy Telegram context for testing."""

    def __init__(self, settings: Settings, args: list[str] | None = None) -> None:
        self.args = args or []
        self.application = DummyApplication(settings)


class DummyNotifier:
    """Records text instead of sending it."""

    def __init__(self) -> None:
        self.sent: list[str] = []

    async def send(self, text: str) -> bool:
        self.sent.append(text)
        return True


class DummyResponse:
    """Dummy HTTP response for testing."""

    def __init__(self, text: str = "", status: int = 200) -> None:
        self.status_code = status
        self.text = text
        self.ok = 200 <= status < 300

    def raise_for_status(self) -> None:
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} error")


@pytest.fixture
def settings() -> Settings:
    return Settings(BOT_TOKEN="123:ABC", CHAT_ID=CHAT_ID)


@pytest.fixture
def notifier() -> DummyNotifier:
    return DummyNotifier()
