"""Telegram application factory and lifecycle."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from telegram.ext import Application, CommandHandler, MessageHandler, filters

from lottobot.bot.commands import register_bot_commands
from lottobot.bot.handlers import (
    handle_balance,
    handle_deposit,
    handle_error,
    handle_help,
    handle_message,
    handle_start,
    handle_subscribe,
    handle_todays_lotteries,
    handle_unsubscribe,
    handle_withdraw,
)
from lottobot.config import settings
from lottobot.ingestion import build_source
from lottobot.scheduler import ReminderBroadcaster, ReminderScheduler
from lottobot.service import RelayService

if TYPE_CHECKING:
    from lottobot.config import Settings
    from lottobot.ingestion.base import UpdateSource

logger = logging.getLogger(__name__)


def create_app(config: Settings | None = None) -> Application:
    """Build the Telegram application with its service and handlers."""
    config = config or settings
    builder = Application.builder().token(config.telegram_bot_token)
    if config.use_webhook:
        # Updates arrive over HTTP; no getUpdates loop.
        builder = builder.updater(None)
    app = builder.build()

    app.bot_data["service"] = RelayService.create(config, app.bot)

    # Edited messages are ignored; only new messages run commands.
    new_messages = filters.UpdateType.MESSAGE
    app.add_handler(CommandHandler("start", handle_start, filters=new_messages))
    app.add_handler(CommandHandler("deposit", handle_deposit, filters=new_messages))
    app.add_handler(CommandHandler("withdraw", handle_withdraw, filters=new_messages))
    app.add_handler(CommandHandler("balance", handle_balance, filters=new_messages))
    app.add_handler(
        CommandHandler("todays_lotteries", handle_todays_lotteries, filters=new_messages)
    )
    app.add_handler(CommandHandler("help", handle_help, filters=new_messages))
    app.add_handler(CommandHandler("subscribe", handle_subscribe, filters=new_messages))
    app.add_handler(CommandHandler("unsubscribe", handle_unsubscribe, filters=new_messages))
    app.add_handler(MessageHandler(new_messages & ~filters.COMMAND, handle_message))
    app.add_error_handler(handle_error)

    return app


def create_reminders(app: Application, config: Settings | None = None) -> ReminderScheduler:
    """Wire the broadcaster to the service registry and the app's bot."""
    config = config or settings
    service: RelayService = app.bot_data["service"]
    broadcaster = ReminderBroadcaster(service.registry, app.bot, service.tasks)
    return ReminderScheduler(broadcaster, cron=config.reminder_cron, timezone=config.reminder_tz)


async def serve(
    app: Application,
    source: UpdateSource,
    reminders: ReminderScheduler,
    stop_event: asyncio.Event,
) -> None:
    """Run until *stop_event* is set, then shut everything down in order."""
    service: RelayService = app.bot_data["service"]
    async with app:
        await app.start()
        try:
            await source.start()
            await register_bot_commands(app.bot)
            await reminders.start()
            logger.info("Telegram bot started (mode=%s)", source.name)
            await stop_event.wait()
        finally:
            logger.info("Shutting down bot...")
            try:
                await reminders.stop()
                await source.stop()
                # Pending reminder and sync sends drain while the application still runs.
                await service.close()
            finally:
                await app.stop()


async def run(config: Settings | None = None, stop_event: asyncio.Event | None = None) -> None:
    """Build the app for the configured ingestion mode and serve it."""
    config = config or settings
    app = create_app(config)
    source = build_source(app, config)
    reminders = create_reminders(app, config)
    await serve(app, source, reminders, stop_event or asyncio.Event())
