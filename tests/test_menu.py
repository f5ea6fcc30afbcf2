"""Tests for the pinned menu tracker (send+pin vs edit)."""

from unittest.mock import AsyncMock, MagicMock

from telegram.error import BadRequest, NetworkError

from lottobot.bot.menu import MENU_TEXT, MenuTracker

FRONTEND = "https://lottery.example.com"


def _tracker(registry, bot) -> MenuTracker:
    return MenuTracker(registry, bot, FRONTEND)


async def test_first_request_sends_and_pins(registry, bot) -> None:
    registry.register("1001", 555, "alice")
    menus = _tracker(registry, bot)

    assert await menus.ensure_menu_for_user("1001") == "sent"

    bot.send_message.assert_awaited_once()
    kwargs = bot.send_message.call_args.kwargs
    assert kwargs["chat_id"] == 555
    assert kwargs["text"] == MENU_TEXT
    bot.pin_chat_message.assert_awaited_once_with(chat_id=555, message_id=42)
    bot.edit_message_reply_markup.assert_not_awaited()
    assert menus.get("1001").message_id == 42


async def test_second_request_edits_in_place(registry, bot) -> None:
    registry.register("1001", 555, "alice")
    menus = _tracker(registry, bot)

    await menus.ensure_menu_for_user("1001")
    assert await menus.ensure_menu_for_user("1001") == "edited"

    assert bot.send_message.await_count == 1
    bot.edit_message_reply_markup.assert_awaited_once()
    kwargs = bot.edit_message_reply_markup.call_args.kwargs
    assert kwargs["chat_id"] == 555
    assert kwargs["message_id"] == 42


async def test_changed_chat_sends_new_menu(registry, bot) -> None:
    registry.register("1001", 555, "alice")
    menus = _tracker(registry, bot)
    await menus.ensure_menu_for_user("1001")

    registry.register("1001", 999, "alice")
    bot.send_message.return_value = MagicMock(message_id=77)
    assert await menus.ensure_menu_for_user("1001") == "sent"

    assert bot.send_message.await_count == 2
    assert menus.get("1001").chat_id == 999
    assert menus.get("1001").message_id == 77


async def test_unknown_user_is_noop(registry, bot) -> None:
    menus = _tracker(registry, bot)
    assert await menus.ensure_menu_for_user("nobody") is None
    assert await menus.ensure_menu_for_user(None) is None
    bot.send_message.assert_not_awaited()


async def test_user_without_chat_is_noop(registry, bot) -> None:
    registry.subscribe("42")
    assert await _tracker(registry, bot).ensure_menu_for_user("42") is None
    bot.send_message.assert_not_awaited()


async def test_pin_failure_keeps_record(registry, bot) -> None:
    registry.register("1", 10)
    bot.pin_chat_message = AsyncMock(side_effect=BadRequest("not enough rights"))
    menus = _tracker(registry, bot)

    assert await menus.ensure_menu_for_user("1") == "sent"
    assert menus.get("1") is not None


async def test_send_failure_is_swallowed(registry, bot) -> None:
    registry.register("1", 10)
    bot.send_message = AsyncMock(side_effect=NetworkError("down"))
    menus = _tracker(registry, bot)

    assert await menus.ensure_menu_for_user("1") is None
    assert menus.get("1") is None
    bot.pin_chat_message.assert_not_awaited()


async def test_edit_failure_is_swallowed(registry, bot) -> None:
    registry.register("1", 10)
    menus = _tracker(registry, bot)
    await menus.ensure_menu_for_user("1")
    bot.edit_message_reply_markup = AsyncMock(side_effect=BadRequest("Message is not modified"))

    assert await menus.ensure_menu_for_user("1") is None
    assert bot.send_message.await_count == 1


async def test_fresh_tracker_sends_again(registry, bot) -> None:
    registry.register("1", 10)
    await _tracker(registry, bot).ensure_menu_for_user("1")

    # A new tracker (process restart) has no memory of the pinned message.
    assert await _tracker(registry, bot).ensure_menu_for_user("1") == "sent"
    assert bot.send_message.await_count == 2


async def test_menu_record_survives_repeated_requests(registry, bot) -> None:
    registry.register("1", 10)
    menus = _tracker(registry, bot)
    await menus.ensure_menu_for_user("1")
    await menus.ensure_menu_for_user("1")

    # Records are never evicted during the process lifetime.
    assert menus.get("1") is not None
    assert not hasattr(menus, "forget")
