"""Reminder broadcast — one detached send per subscribed user."""

from __future__ import annotations

import asyncio
import logging
import random
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    import telegram

    from lottobot.tasks import BackgroundTasks
    from lottobot.users.models import ChatId
    from lottobot.users.registry import UserRegistry

logger = logging.getLogger(__name__)

REMINDERS: tuple[str, ...] = (
    "Hey there! Ever tried your luck with the Kiya Lottery? Today could be your lucky day!",
    "Don't miss out! Check out today's lotteries and maybe win big! 💰",
    "Feeling lucky? Play the Kiya Lottery today and turn your day around! ✨",
    "A small bet, a big dream. Join the Kiya Lottery now!",
    "Did you know? Your next ticket could be a winner! Play the Kiya Lottery today.",
    "Yes, it maybe a bad day, but if you win a lottery it'd be not. 😉 Play today!",
    "Your chance to win big is just a tap away! Explore today's lotteries.",
    "Don't let luck pass you by! Participate in the Kiya Lottery now.",
)


class ReminderBroadcaster:
    """Sends the same randomly chosen reminder to every subscribed user.

    Sends are independent tasks: no ordering, no shared transaction, and a
    failure for one recipient is logged and has no effect on the others.

    Args:
        registry: Source of subscribed recipients.
        bot: Telegram bot used for delivery.
        tasks: Detached task set the sends are spawned on; drained at shutdown.
        messages: Pool of reminder texts.
        choose: Picks one message from the pool (``random.choice`` by default).
    """

    def __init__(
        self,
        registry: UserRegistry,
        bot: telegram.Bot,
        tasks: BackgroundTasks,
        messages: Sequence[str] = REMINDERS,
        choose: Callable[[Sequence[str]], str] = random.choice,
    ) -> None:
        self._registry = registry
        self._bot = bot
        self._messages = messages
        self._choose = choose
        self._tasks = tasks
        self.delivered = 0

    async def _send_one(self, user_id: str, chat_id: ChatId, message: str) -> bool:
        try:
            await self._bot.send_message(chat_id=chat_id, text=message)
        except Exception as exc:
            logger.debug("Reminder to user %s failed: %s", user_id, exc)
            return False
        self.delivered += 1
        return True

    def broadcast(self) -> list[asyncio.Task]:
        """Spawn one send per recipient and return the tasks without awaiting them."""
        message = self._choose(self._messages)
        self.delivered = 0
        spawned: list[asyncio.Task] = []
        for user_id, rec in self._registry.subscribed_recipients():
            task = self._tasks.spawn(
                self._send_one(user_id, rec.chat_id, message), name=f"reminder:{user_id}"
            )
            if task is not None:
                spawned.append(task)

        # Sends still in flight are not counted.
        logger.info(
            "Triggered reminders; messages attempted to %d users. %s",
            self.delivered,
            datetime.now(UTC).isoformat(),
        )
        logger.debug("Reminder fan-out: %d send(s) spawned", len(spawned))
        return spawned

    async def run(self) -> None:
        """APScheduler job entry point."""
        self.broadcast()
