"""Detached background work with logged, discarded failures."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Coroutine

logger = logging.getLogger(__name__)


class BackgroundTasks:
    """Spawns fire-and-forget tasks and keeps them alive until they finish.

    Callers never await the returned task for correctness. Exceptions are
    logged and dropped; nothing is retried.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    def spawn(self, coro: Coroutine[Any, Any, Any], *, name: str = "") -> asyncio.Task | None:
        """Schedule *coro* on the running loop. Returns None outside a loop."""
        try:
            task = asyncio.get_running_loop().create_task(coro)
        except RuntimeError:
            # No running loop (sync tests, shutdown); drop the work.
            coro.close()
            logger.debug("No event loop, dropped background task %s", name or "?")
            return None
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._finished(t, name))
        return task

    def _finished(self, task: asyncio.Task, name: str) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Background task %s failed: %s", name or task.get_name(), exc)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every in-flight task; used at shutdown."""
        if self._tasks:
            logger.info("Waiting for %d background task(s)", len(self._tasks))
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
