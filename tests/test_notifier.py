import logging
from unittest.mock import AsyncMock, Mock

import pytest
from telegram.constants import ParseMode
from telegram.error import NetworkError

from tele_host_monitor.notifier import Notifier


@pytest.mark.asyncio
async def test_send_uses_markdown_and_chat() -> None:
    bot = Mock()
    bot.send_message = AsyncMock()
    notifier = Notifier(bot, 42)

    assert await notifier.send("*hi*") is True

    kwargs = bot.send_message.await_args.kwargs
    assert kwargs["chat_id"] == 42
    assert kwargs["text"] == "*hi*"
    assert kwargs["parse_mode"] == ParseMode.MARKDOWN
    assert kwargs["link_preview_options"].is_disabled is True


@pytest.mark.asyncio
async def test_send_failure_is_logged_not_raised(caplog) -> None:
    bot = Mock()
    bot.send_message = AsyncMock(side_effect=NetworkError("boom"))
    notifier = Notifier(bot, 42)

    with caplog.at_level(logging.WARNING):
        assert await notifier.send("text") is False

    assert bot.send_message.await_count == 1
    assert "chat_id 42" in caplog.text
