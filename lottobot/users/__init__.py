"""User registry — models, JSON persistence and subscription state."""

from lottobot.users.models import UserRecord
from lottobot.users.registry import UserRegistry
from lottobot.users.store import UserStore

__all__ = [
    "UserRecord",
    "UserRegistry",
    "UserStore",
]
