"""Shared handler helpers: state access, auth guard, safe edits."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from telegram.error import BadRequest

from ..state import BOT_STATE_KEY, BotState

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from telegram import Update
    from telegram.ext import ContextTypes


def get_state(app) -> BotState:
    """Retrieve the bot state stored on the application at build time."""
    return app.bot_data[BOT_STATE_KEY]


def allowed(update: "Update", state: BotState) -> bool:
    """Only the configured report chat may use the bot."""
    if not update.effective_chat:
        return False
    return update.effective_chat.id == state.settings.CHAT_ID


async def guard(update: "Update", context: "ContextTypes.DEFAULT_TYPE") -> bool:
    if allowed(update, get_state(context.application)):
        return True
    if update and update.effective_chat:
        logger.info("Rejected command from chat_id %s", update.effective_chat.id)
        await update.effective_chat.send_message("⛔ Not authorized")
    return False


async def safe_edit_message_text(query, text: str, **kwargs) -> None:
    try:
        await query.edit_message_text(text, **kwargs)
    except BadRequest as exc:
        if "Message is not modified" in str(exc):
            return
        raise
