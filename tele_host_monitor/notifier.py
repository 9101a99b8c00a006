"""Outbound delivery of report and alert text to the configured chat."""

from __future__ import annotations

import logging

from telegram import Bot, LinkPreviewOptions
from telegram.constants import ParseMode
from telegram.error import TelegramError

from .errors import DeliveryError

logger = logging.getLogger(__name__)

SEND_TIMEOUT_S = 10.0


class Notifier:
    """Send Markdown text to one chat. Failures are logged, never retried."""

    def __init__(self, bot: Bot, chat_id: int) -> None:
        self.bot = bot
        self.chat_id = chat_id

    async def _deliver(self, text: str) -> None:
        try:
            await self.bot.send_message(
                chat_id=self.chat_id,
                text=text,
                parse_mode=ParseMode.MARKDOWN,
                link_preview_options=LinkPreviewOptions(is_disabled=True),
                connect_timeout=SEND_TIMEOUT_S,
                read_timeout=SEND_TIMEOUT_S,
                write_timeout=SEND_TIMEOUT_S,
            )
        except TelegramError as e:
            raise DeliveryError(f"send to chat_id {self.chat_id} failed: {e}") from e

    async def send(self, text: str) -> bool:
        try:
            await self._deliver(text)
        except DeliveryError as e:
            logger.warning("%s", e)
            return False
        return True
