"""Bot command surface shown in the Telegram client."""

import logging

import telegram
from telegram import BotCommand

logger = logging.getLogger(__name__)

BOT_COMMANDS: list[tuple[str, str]] = [
    ("start", "Open MiniApp / get quick actions"),
    ("deposit", "Open deposit page"),
    ("withdraw", "Open withdraw page"),
    ("balance", "View wallet / balance"),
    ("todays_lotteries", "Show today's lotteries"),
    ("subscribe", "Subscribe to daily reminders"),
    ("unsubscribe", "Unsubscribe from reminders"),
    ("help", "Show help and commands"),
]

HELP_TEXT = """Available commands:
/start - Open quick actions menu
/deposit - Open deposit page
/withdraw - Open withdraw page
/balance - View wallet/balance
/todays_lotteries - Open lotteries list
/subscribe - Subscribe to daily reminders
/unsubscribe - Unsubscribe from reminders
/help - Show this help message
"""


async def register_bot_commands(bot: telegram.Bot) -> bool:
    """Publish the command list. Failures are logged and ignored."""
    try:
        await bot.set_my_commands([BotCommand(name, desc) for name, desc in BOT_COMMANDS])
        return True
    except Exception as exc:
        logger.warning("Failed to register bot commands: %s", exc)
        return False
