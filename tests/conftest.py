"""Shared test fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from lottobot.bot.menu import MenuTracker
from lottobot.service import RelayService
from lottobot.tasks import BackgroundTasks
from lottobot.users.registry import UserRegistry
from lottobot.users.store import UserStore

FRONTEND = "https://lottery.example.com"


@pytest.fixture
def users_file(tmp_path):
    return tmp_path / "data" / "users.json"


@pytest.fixture
def backend() -> MagicMock:
    """Stand-in for BackendSync; its public calls are synchronous."""
    return MagicMock()


@pytest.fixture
def registry(users_file, backend) -> UserRegistry:
    return UserRegistry(UserStore(users_file), backend)


@pytest.fixture
def bot() -> AsyncMock:
    """Mock telegram.Bot whose send_message returns a message with an id."""
    bot = AsyncMock()
    bot.send_message = AsyncMock(return_value=MagicMock(message_id=42))
    return bot


@pytest.fixture
def service(registry, backend, bot) -> RelayService:
    return RelayService(
        registry=registry,
        menus=MenuTracker(registry, bot, FRONTEND),
        backend=backend,
        tasks=BackgroundTasks(),
        frontend_base=FRONTEND,
    )
