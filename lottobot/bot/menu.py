"""Pinned quick-action menu: edit in place when possible, otherwise send and pin."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from lottobot.bot.buttons import core_buttons_for, keyboard

if TYPE_CHECKING:
    import telegram

    from lottobot.users.models import ChatId
    from lottobot.users.registry import UserRegistry

logger = logging.getLogger(__name__)

MENU_TEXT = "Quick actions:"

MenuAction = Literal["edited", "sent"]


@dataclass
class MenuRecord:
    chat_id: ChatId
    message_id: int | None


class MenuTracker:
    """Remembers the last menu message sent to each user.

    Process-local only. After a restart the next interaction sends and pins
    a fresh menu even if an older pinned one is still in the chat.

    Args:
        registry: Source of each user's chat id.
        bot: Telegram bot used for edit/send/pin.
        frontend_base: Web app origin for the button URLs.
    """

    def __init__(self, registry: UserRegistry, bot: telegram.Bot, frontend_base: str) -> None:
        self._registry = registry
        self._bot = bot
        self._frontend_base = frontend_base.rstrip("/")
        self._menus: dict[str, MenuRecord] = {}

    def get(self, user_id: str) -> MenuRecord | None:
        return self._menus.get(user_id)

    async def ensure_menu_for_user(self, user_id: str | None) -> MenuAction | None:
        """Make sure *user_id* has one live, current menu.

        Every Telegram call here is best-effort; failures are logged and
        never raised. Returns the path taken, or None when nothing happened.
        """
        if not user_id:
            return None
        rec = self._registry.get(user_id)
        if rec is None or not rec.reachable:
            return None

        chat_id = rec.chat_id
        markup = keyboard(core_buttons_for(user_id, self._frontend_base))
        existing = self._menus.get(user_id)

        if existing and existing.chat_id == chat_id and existing.message_id:
            try:
                await self._bot.edit_message_reply_markup(
                    chat_id=chat_id, message_id=existing.message_id, reply_markup=markup
                )
            except Exception as exc:
                # "message is not modified" lands here too
                logger.debug("Menu edit failed for user %s: %s", user_id, exc)
                return None
            return "edited"

        try:
            sent = await self._bot.send_message(chat_id=chat_id, text=MENU_TEXT, reply_markup=markup)
        except Exception as exc:
            logger.debug("Menu send failed for user %s: %s", user_id, exc)
            return None

        self._menus[user_id] = MenuRecord(chat_id=chat_id, message_id=sent.message_id)
        try:
            await self._bot.pin_chat_message(chat_id=chat_id, message_id=sent.message_id)
        except Exception as exc:
            logger.debug("Menu pin failed for user %s: %s", user_id, exc)
        return "sent"
