"""RelayService — owns all mutable bot state for one process."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lottobot.backend.client import BackendSync
from lottobot.bot.menu import MenuTracker
from lottobot.tasks import BackgroundTasks
from lottobot.users.registry import UserRegistry
from lottobot.users.store import UserStore

if TYPE_CHECKING:
    import telegram

    from lottobot.config import Settings

logger = logging.getLogger(__name__)


class RelayService:
    """Registry, menu tracker and backend sync, built once at startup.

    Handlers reach it through ``context.bot_data["service"]``; the reminder
    scheduler receives it directly.
    """

    def __init__(
        self,
        registry: UserRegistry,
        menus: MenuTracker,
        backend: BackendSync,
        tasks: BackgroundTasks,
        frontend_base: str,
    ) -> None:
        self.registry = registry
        self.menus = menus
        self.backend = backend
        self.tasks = tasks
        self.frontend_base = frontend_base.rstrip("/")

    @classmethod
    def create(cls, config: Settings, bot: telegram.Bot) -> RelayService:
        tasks = BackgroundTasks()
        backend = BackendSync(config.backend_base, tasks)
        registry = UserRegistry(UserStore(config.users_file), backend)
        menus = MenuTracker(registry, bot, config.frontend_base)
        logger.info(
            "Service ready: %d user(s), backend sync %s",
            len(registry),
            "on" if backend.enabled else "off",
        )
        return cls(registry, menus, backend, tasks, config.frontend_base)

    def page_url(self, path: str) -> str:
        """Absolute web app URL for *path* (``"/deposit"``, ``"/"``...)."""
        return f"{self.frontend_base}{path}"

    async def close(self) -> None:
        """Drain detached work, close HTTP clients and flush the registry."""
        await self.tasks.drain()
        await self.backend.close()
        self.registry.flush()
        logger.info("Service closed")
