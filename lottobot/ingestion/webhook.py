"""Push mode: aiohttp endpoint receiving updates posted by Telegram.

The only route is ``POST /bot<token>``; the token in the path is the shared
secret. Every request is answered with 200, whatever happens during parsing or
dispatch, so Telegram never retry-storms a failing update.

Runs inside the same asyncio loop as the PTB Application, using aiohttp's
AppRunner/TCPSite for non-blocking start/stop.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from aiohttp import web
from telegram import Update

if TYPE_CHECKING:
    from telegram.ext import Application

logger = logging.getLogger(__name__)

_APP_KEY = web.AppKey("telegram_app", object)


async def _handle_update(request: web.Request) -> web.Response:
    """Parse the body and dispatch it; always 200."""
    tg_app: Application = request.app[_APP_KEY]
    try:
        payload: dict[str, Any] = await request.json()
        update = Update.de_json(payload, tg_app.bot)
        await tg_app.process_update(update)
    except Exception:
        logger.exception("Failed to process pushed update")
    return web.Response(status=200)


def create_web_app(tg_app: Application, path: str) -> web.Application:
    """Build the aiohttp Application with the single update route."""
    app = web.Application()
    app[_APP_KEY] = tg_app
    app.router.add_post(path, _handle_update)
    return app


class WebhookSource:
    """Serves the update endpoint and registers it with Telegram.

    Args:
        app: PTB Application whose handlers process the updates.
        base_url: Public origin Telegram can reach, e.g. ``https://bot.example.com``.
        path: Secret-bearing route, ``/bot<token>``.
        port: Local listening port.
    """

    def __init__(self, app: Application, base_url: str, path: str, port: int) -> None:
        self._app = app
        self._base_url = base_url.rstrip("/")
        self._path = path
        self.port = port
        self._runner: web.AppRunner | None = None

    @property
    def name(self) -> str:
        return "webhook"

    @property
    def webhook_url(self) -> str:
        return f"{self._base_url}{self._path}"

    async def start(self) -> None:
        self._runner = web.AppRunner(create_web_app(self._app, self._path))
        await self._runner.setup()
        site = web.TCPSite(self._runner, "0.0.0.0", self.port)
        await site.start()
        logger.info("Webhook server listening on port %d", self.port)

        try:
            await self._app.bot.set_webhook(url=self.webhook_url)
            logger.info("Webhook registered with Telegram")
        except Exception as exc:
            logger.warning("Failed to register webhook: %s", exc)

    async def stop(self) -> None:
        """Close the socket; in-flight requests are not drained."""
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
            logger.info("Webhook server stopped")
        try:
            await self._app.bot.delete_webhook()
        except Exception as exc:
            logger.debug("Failed to delete webhook: %s", exc)
