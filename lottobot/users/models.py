"""UserRecord data model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

ChatId = int | str


@dataclass
class UserRecord:
    """A registered Telegram user.

    Attributes:
        chat_id: Where reminders and replies go. ``None`` until the user sends
            a message (e.g. after a bare ``subscribe``).
        username: Last known Telegram username.
        subscribed: Whether the user receives scheduled reminders.
    """

    chat_id: ChatId | None = None
    username: str | None = None
    subscribed: bool = True

    @property
    def reachable(self) -> bool:
        return self.chat_id is not None and self.chat_id != ""

    # -- Serialisation ---------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """On-disk form."""
        return {
            "chatDestination": self.chat_id,
            "displayName": self.username,
            "subscribed": self.subscribed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserRecord:
        """Build from the on-disk form; accepts the legacy ``chatId``/``username`` keys."""
        chat_id = data.get("chatDestination", data.get("chatId"))
        username = data.get("displayName", data.get("username"))
        subscribed = data.get("subscribed", True)
        return cls(chat_id=chat_id, username=username or None, subscribed=bool(subscribed))
