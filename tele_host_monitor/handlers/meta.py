from __future__ import annotations

import logging

from telegram import InlineKeyboardButton, InlineKeyboardMarkup
from telegram.constants import ParseMode

from .. import services
from ..config import Settings
from .common import get_state, guard

logger = logging.getLogger(__name__)

STATUS_CALLBACK = "status"


def status_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        [[InlineKeyboardButton("📊 实时状态", callback_data=STATUS_CALLBACK)]]
    )


def render_start(settings: Settings) -> str:
    return (
        "🤖 服务器监控机器人已启动！\n\n"
        f"📅 定时报告时间: {settings.REPORT_TIME} (北京时间)\n"
        f"⚠️ CPU 告警阈值: {settings.CPU_THRESHOLD}%\n"
        f"⚠️ 内存告警阈值: {settings.MEM_THRESHOLD}%\n\n"
        "点击下方按钮获取实时状态:"
    )


async def cmd_start(update, context) -> None:
    if not await guard(update, context):
        return
    state = get_state(context.application)
    await update.message.reply_text(
        render_start(state.settings), reply_markup=status_keyboard()
    )


async def cmd_help(update, context) -> None:
    await cmd_start(update, context)


async def cmd_status(update, context) -> None:
    if not await guard(update, context):
        return
    state = get_state(context.application)
    report = await services.generate_report(state.settings)
    await update.message.reply_text(
        report, parse_mode=ParseMode.MARKDOWN, reply_markup=status_keyboard()
    )
