"""Tests for detached background task spawning."""

import asyncio
import logging

from lottobot.tasks import BackgroundTasks


async def test_spawn_runs_and_forgets() -> None:
    tasks = BackgroundTasks()
    done = asyncio.Event()

    async def work() -> None:
        done.set()

    task = tasks.spawn(work(), name="work")
    assert task is not None
    assert tasks.pending == 1

    await tasks.drain()
    assert done.is_set()
    assert tasks.pending == 0


async def test_failure_is_logged_not_raised(caplog) -> None:
    tasks = BackgroundTasks()

    async def boom() -> None:
        raise RuntimeError("kaput")

    with caplog.at_level(logging.WARNING, logger="lottobot.tasks"):
        tasks.spawn(boom(), name="boom")
        await tasks.drain()
        await asyncio.sleep(0)

    assert "Background task boom failed: kaput" in caplog.text
    assert tasks.pending == 0


def test_spawn_without_loop_drops_work() -> None:
    tasks = BackgroundTasks()
    ran = []

    async def work() -> None:
        ran.append(True)

    assert tasks.spawn(work()) is None
    assert ran == []
    assert tasks.pending == 0


async def test_drain_with_nothing_pending() -> None:
    await BackgroundTasks().drain()
