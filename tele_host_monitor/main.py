"""Entrypoint for running the monitoring bot from the package.

This module wires up the Application, registers handlers, starts the
background loops and runs polling.
"""

from __future__ import annotations

import logging

from telegram import BotCommand
from telegram.ext import Application, CallbackQueryHandler, CommandHandler

from . import background
from .commands import COMMANDS
from .config import Settings, load_settings
from .errors import ConfigError
from .handlers import meta
from .handlers.callbacks import handle_callback_query
from .logger import setup_logging
from .state import BOT_STATE_KEY, BotState

logger = logging.getLogger(__name__)


def build_application(settings: Settings) -> Application:
    app = Application.builder().token(settings.BOT_TOKEN).build()

    app.bot_data[BOT_STATE_KEY] = BotState(settings=settings)

    for spec in COMMANDS:
        fn = getattr(meta, spec.handler)
        triggers = [spec.name, *spec.aliases]
        app.add_handler(CommandHandler(triggers, fn))

    app.add_handler(CallbackQueryHandler(handle_callback_query))

    app.post_init = on_startup
    app.post_shutdown = background.stop
    return app


async def register_bot_commands(app: Application) -> None:
    """Register bot commands for Telegram autocomplete."""
    try:
        bot_commands = [BotCommand(spec.name, spec.description) for spec in COMMANDS]
        await app.bot.set_my_commands(bot_commands)
        logger.info(f"Registered {len(bot_commands)} commands for autocomplete")
    except Exception as e:
        logger.warning(f"Failed to register bot commands: {e}")


async def on_startup(app: Application) -> None:
    background.ensure_started(app)
    await register_bot_commands(app)
    settings: Settings = app.bot_data[BOT_STATE_KEY].settings
    logger.info(
        "Bot started, report time %s (UTC+8), cpu>%d%% mem>%d%%",
        settings.REPORT_TIME,
        settings.CPU_THRESHOLD,
        settings.MEM_THRESHOLD,
    )


def run() -> None:
    setup_logging()
    logger.info("Starting tele_host_monitor")
    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        raise SystemExit(1) from e

    app = build_application(settings)
    # default stop signals so SIGTERM runs post_shutdown and cancels the loops
    app.run_polling()


if __name__ == "__main__":
    run()
