"""Pull mode: long-poll Telegram's getUpdates feed."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from telegram.ext import Application

logger = logging.getLogger(__name__)


class PollingSource:
    """Feeds updates from the PTB Updater into the application queue."""

    def __init__(self, app: Application) -> None:
        if app.updater is None:
            raise ValueError("Polling requires an Application built with an Updater")
        self._app = app

    @property
    def name(self) -> str:
        return "polling"

    async def start(self) -> None:
        # start_polling also clears any webhook left by a previous deployment.
        await self._app.updater.start_polling()
        logger.info("Polling for updates")

    async def stop(self) -> None:
        if self._app.updater.running:
            await self._app.updater.stop()
            logger.info("Polling stopped")
