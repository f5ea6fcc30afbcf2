"""Tests for the fire-and-forget backend sync adapter."""

import asyncio
import json

import httpx

from lottobot.backend.client import LINK_PATH, SUBSCRIPTION_PATH, BackendSync
from lottobot.tasks import BackgroundTasks

BASE = "https://backend.example.com"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=BASE, transport=httpx.MockTransport(handler))


async def test_link_posts_payload() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    tasks = BackgroundTasks()
    sync = BackendSync(BASE, tasks, client=_client(handler))

    sync.link_telegram("1001", "alice")
    await tasks.drain()

    assert len(seen) == 1
    assert seen[0].method == "POST"
    assert seen[0].url == f"{BASE}{LINK_PATH}"
    assert json.loads(seen[0].read()) == {"telegramId": "1001", "username": "alice"}
    await sync.close()


async def test_subscription_posts_flag() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == SUBSCRIPTION_PATH
        bodies.append(json.loads(request.read()))
        return httpx.Response(204)

    tasks = BackgroundTasks()
    sync = BackendSync(BASE, tasks, client=_client(handler))

    sync.set_subscription("7", False)
    await tasks.drain()

    assert bodies == [{"telegramId": "7", "subscribed": False}]
    await sync.close()


async def test_http_error_is_swallowed() -> None:
    sync = BackendSync(BASE, BackgroundTasks(), client=_client(lambda r: httpx.Response(500)))
    assert await sync.post(LINK_PATH, {"telegramId": "1"}) is False
    await sync.close()


async def test_network_error_is_swallowed() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    sync = BackendSync(BASE, BackgroundTasks(), client=_client(handler))
    assert await sync.post(LINK_PATH, {"telegramId": "1"}) is False
    await sync.close()


async def test_push_returns_before_request_completes() -> None:
    release = asyncio.Event()
    done = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        await release.wait()
        done.set()
        return httpx.Response(200)

    tasks = BackgroundTasks()
    client = httpx.AsyncClient(base_url=BASE, transport=httpx.MockTransport(handler))
    sync = BackendSync(BASE, tasks, client=client)

    sync.link_telegram("1", None)
    await asyncio.sleep(0)
    assert tasks.pending == 1
    assert not done.is_set()

    release.set()
    await tasks.drain()
    assert done.is_set()
    await sync.close()


async def test_disabled_without_base_url() -> None:
    tasks = BackgroundTasks()
    sync = BackendSync("", tasks)

    assert sync.enabled is False
    sync.link_telegram("1", "a")
    sync.set_subscription("1", True)
    assert tasks.pending == 0
