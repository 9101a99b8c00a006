"""Callback query handlers for inline keyboard buttons."""

from __future__ import annotations

import logging

from telegram.constants import ParseMode

from .. import services
from .common import allowed, get_state, safe_edit_message_text
from .meta import STATUS_CALLBACK, status_keyboard

logger = logging.getLogger(__name__)


async def handle_callback_query(update, context) -> None:
    query = update.callback_query
    await query.answer()

    state = get_state(context.application)
    if not allowed(update, state):
        await safe_edit_message_text(query, "⛔ Not authorized")
        return

    if query.data == STATUS_CALLBACK:
        report = await services.generate_report(state.settings)
        await safe_edit_message_text(
            query,
            report,
            parse_mode=ParseMode.MARKDOWN,
            reply_markup=status_keyboard(),
        )
    else:
        logger.debug("Ignoring unknown callback data %r", query.data)
