"""Telegram command handlers.

Every handler registers the sender first, so command traffic always refreshes
the user's last known chat. Handlers keep no conversation state; each update
is a complete transaction against the registry and menu tracker.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from telegram import Update
from telegram.ext import ContextTypes

from lottobot.bot.buttons import single_button
from lottobot.bot.commands import HELP_TEXT

if TYPE_CHECKING:
    from telegram import InlineKeyboardMarkup

    from lottobot.service import RelayService

logger = logging.getLogger(__name__)

UNKNOWN_USER_TEXT = "Could not determine your user id."
SUBSCRIBED_TEXT = "You have been subscribed to reminders."
UNSUBSCRIBED_TEXT = "You have been unsubscribed from reminders."
NOT_SUBSCRIBED_TEXT = "You were not subscribed."


def _service(context: ContextTypes.DEFAULT_TYPE) -> RelayService:
    return context.bot_data["service"]


def _register(update: Update, context: ContextTypes.DEFAULT_TYPE) -> str | None:
    """Upsert the sender. Returns their identity, or None if unknown."""
    user = update.effective_user
    chat = update.effective_chat
    if user is None or chat is None:
        return None
    return _service(context).registry.register(user.id, chat.id, user.username)


async def _reply(
    context: ContextTypes.DEFAULT_TYPE,
    chat_id: int,
    text: str,
    markup: InlineKeyboardMarkup | None = None,
) -> None:
    try:
        await context.bot.send_message(chat_id=chat_id, text=text, reply_markup=markup)
    except Exception as exc:
        logger.warning("Reply to chat %s failed: %s", chat_id, exc)


# -- Menu -----------------------------------------------------------------------


async def handle_start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start — register and show the pinned quick-action menu."""
    user_id = _register(update, context)
    if user_id is None:
        await _reply(context, update.effective_chat.id, UNKNOWN_USER_TEXT)
        return
    await _service(context).menus.ensure_menu_for_user(user_id)


async def handle_help(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help — list commands and refresh the menu."""
    user_id = _register(update, context)
    await _reply(context, update.effective_chat.id, HELP_TEXT)
    if user_id:
        await _service(context).menus.ensure_menu_for_user(user_id)


# -- Link panels ----------------------------------------------------------------


def _link_panel(prompt: str, path: str, label: str):
    """Build a handler that answers with a single web app button."""

    async def handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        _register(update, context)
        url = _service(context).page_url(path)
        await _reply(context, update.effective_chat.id, prompt, single_button(url, label))

    handler.__name__ = f"handle_{label.lower()}_panel"
    handler.__doc__ = f"Send the {label} link panel."
    return handler


handle_deposit = _link_panel("Open deposit page:", "/deposit", "Deposit")
handle_withdraw = _link_panel("Open withdraw page:", "/withdraw", "Withdraw")
handle_balance = _link_panel("View your wallet:", "/wallet", "Wallet")
handle_todays_lotteries = _link_panel("Today's lotteries:", "/", "Lotteries")


# -- Subscription ---------------------------------------------------------------


async def handle_subscribe(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /subscribe."""
    chat_id = update.effective_chat.id
    user_id = _register(update, context)
    if user_id is None:
        await _reply(context, chat_id, UNKNOWN_USER_TEXT)
        return
    _service(context).registry.subscribe(user_id)
    await _reply(context, chat_id, SUBSCRIBED_TEXT)


async def handle_unsubscribe(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /unsubscribe."""
    chat_id = update.effective_chat.id
    user_id = _register(update, context)
    if user_id is None:
        await _reply(context, chat_id, UNKNOWN_USER_TEXT)
        return
    ok = _service(context).registry.unsubscribe(user_id)
    await _reply(context, chat_id, UNSUBSCRIBED_TEXT if ok else NOT_SUBSCRIBED_TEXT)


# -- Passive --------------------------------------------------------------------


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Any non-command message: just keep the registry fresh."""
    if update.effective_user is None:
        return
    _register(update, context)


async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log exceptions escaping a handler; nothing is sent to the user."""
    logger.error("Unhandled error while processing update", exc_info=context.error)
