"""UserStore — flat JSON file holding every UserRecord."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from lottobot.users.models import UserRecord

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class UserStore:
    """Reads and writes the whole user map as one pretty-printed JSON object.

    All methods are synchronous. The file is small and rewritten in full on
    every mutation, so there is no partial or delta write.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> dict[str, UserRecord]:
        """Return the persisted map, or an empty one if it cannot be read."""
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            if not isinstance(raw, dict):
                raise ValueError(f"expected a JSON object, got {type(raw).__name__}")
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load users from %s, starting fresh: %s", self._path, exc)
            return {}

        users: dict[str, UserRecord] = {}
        for user_id, data in raw.items():
            if not isinstance(data, dict):
                logger.warning("Skipping malformed user entry %s", user_id)
                continue
            users[str(user_id)] = UserRecord.from_dict(data)
        logger.info("Loaded %d user(s) from %s", len(users), self._path)
        return users

    def save(self, users: dict[str, UserRecord]) -> bool:
        """Write the full map. Returns False (and logs) on failure."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            payload = {user_id: rec.to_dict() for user_id, rec in users.items()}
            self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            return True
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to save users to %s", self._path)
            return False
