"""UserRegistry — who gets reminders and where."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lottobot.users.models import ChatId, UserRecord

if TYPE_CHECKING:
    from lottobot.backend.client import BackendSync
    from lottobot.users.store import UserStore

logger = logging.getLogger(__name__)


class UserRegistry:
    """In-memory user map backed by a UserStore.

    Mutations never await: each one updates the map, flushes the whole map
    to disk and queues a detached backend push, so a handler can call them
    without yielding to other handlers mid-update. The in-memory map is the
    authority; a failed flush is logged and not rolled back.

    Args:
        store: JSON file persistence.
        backend: Remote sync adapter.
    """

    def __init__(self, store: UserStore, backend: BackendSync) -> None:
        self._store = store
        self._backend = backend
        self._users: dict[str, UserRecord] = store.load()

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    def get(self, user_id: str) -> UserRecord | None:
        return self._users.get(user_id)

    def snapshot(self) -> dict[str, UserRecord]:
        """Shallow copy of the map, safe to iterate while handlers mutate."""
        return dict(self._users)

    def subscribed_recipients(self) -> list[tuple[str, UserRecord]]:
        """Subscribed users with a known chat, in registration order."""
        return [
            (user_id, rec)
            for user_id, rec in self.snapshot().items()
            if rec.subscribed and rec.reachable
        ]

    # -- Mutations -------------------------------------------------------------

    def register(
        self, user_id: str | int | None, chat_id: ChatId, username: str | None = None
    ) -> str | None:
        """Upsert a user from an inbound event. Returns the identity, or None."""
        if user_id is None or user_id == "":
            return None
        user_id = str(user_id)
        prev = self._users.get(user_id)
        if prev is None:
            rec = UserRecord(chat_id=chat_id, username=username or None, subscribed=True)
            logger.info("New user registered: %s", user_id)
        else:
            rec = UserRecord(
                chat_id=chat_id,
                username=username or prev.username,
                subscribed=prev.subscribed,
            )
        self._users[user_id] = rec
        self.flush()
        self._backend.link_telegram(user_id, rec.username)
        return user_id

    def unsubscribe(self, user_id: str) -> bool:
        """Stop reminders. Returns False if the user was never seen."""
        rec = self._users.get(user_id)
        if rec is None:
            return False
        rec.subscribed = False
        self.flush()
        self._backend.set_subscription(user_id, False)
        logger.info("User %s unsubscribed", user_id)
        return True

    def subscribe(self, user_id: str) -> bool:
        """Start reminders, creating a destination-less record if needed."""
        rec = self._users.get(user_id)
        if rec is None:
            rec = UserRecord(chat_id=None, username=None, subscribed=True)
            self._users[user_id] = rec
        rec.subscribed = True
        self.flush()
        self._backend.set_subscription(user_id, True)
        logger.info("User %s subscribed", user_id)
        return True

    def flush(self) -> bool:
        """Write the whole map to disk."""
        return self._store.save(self._users)
