"""Best-effort sync of registry changes to the lottery backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from lottobot.tasks import BackgroundTasks

logger = logging.getLogger(__name__)

LINK_PATH = "/api/integrations/telegram/link"
SUBSCRIPTION_PATH = "/api/integrations/telegram/subscription"


class BackendSync:
    """Pushes link and subscription changes to the backend HTTP API.

    Every call is detached: it returns immediately and the POST runs as a
    background task. HTTP and network errors are logged at debug and dropped.
    An empty *base_url* turns every call into a no-op.

    Args:
        base_url: Backend origin, e.g. ``https://api.example.com``.
        tasks: Spawner for the detached requests.
        client: Optional pre-built ``httpx.AsyncClient`` (tests).
    """

    def __init__(
        self,
        base_url: str,
        tasks: BackgroundTasks,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._tasks = tasks
        self._client = client

    @property
    def enabled(self) -> bool:
        return bool(self._base_url)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(base_url=self._base_url)
        return self._client

    # -- Public API --------------------------------------------------------------

    def link_telegram(self, telegram_id: str, username: str | None) -> None:
        """Link a Telegram identity to a backend profile (fire-and-forget)."""
        self._push(LINK_PATH, {"telegramId": telegram_id, "username": username})

    def set_subscription(self, telegram_id: str, subscribed: bool) -> None:
        """Mirror the reminder subscription flag (fire-and-forget)."""
        self._push(SUBSCRIPTION_PATH, {"telegramId": telegram_id, "subscribed": subscribed})

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    # -- Internal ----------------------------------------------------------------

    def _push(self, path: str, payload: dict[str, Any]) -> None:
        if not self.enabled:
            return
        self._tasks.spawn(self.post(path, payload), name=f"backend:{path}")

    async def post(self, path: str, payload: dict[str, Any]) -> bool:
        """POST *payload* to *path*. Returns True on a 2xx response."""
        try:
            resp = await self._get_client().post(path, json=payload)
            resp.raise_for_status()
            return True
        except httpx.HTTPError as exc:
            logger.debug("Backend sync %s failed: %s", path, exc)
            return False
