"""Inline keyboard helpers for links into the lottery web app."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, WebAppInfo

# Characters JavaScript's encodeURIComponent leaves alone beyond quote()'s defaults.
_URI_COMPONENT_SAFE = "!*'()"


@dataclass(frozen=True)
class LinkButton:
    text: str
    url: str


def make_inline_button(url: str, text: str) -> InlineKeyboardButton:
    """HTTPS links open as a Telegram Mini App, anything else as a plain link."""
    if url.startswith("https://"):
        return InlineKeyboardButton(text=text, web_app=WebAppInfo(url=url))
    return InlineKeyboardButton(text=text, url=url)


def keyboard(buttons: list[LinkButton]) -> InlineKeyboardMarkup:
    """One button per row."""
    return InlineKeyboardMarkup([[make_inline_button(b.url, b.text)] for b in buttons])


def single_button(url: str, text: str) -> InlineKeyboardMarkup:
    return keyboard([LinkButton(text=text, url=url)])


def dashboard_link(frontend_base: str, user_id: str) -> str:
    user = quote(user_id, safe=_URI_COMPONENT_SAFE)
    return f"{frontend_base}/?userId={user}&action=handle_start"


def core_buttons_for(user_id: str, frontend_base: str) -> list[LinkButton]:
    """The quick-action panel shown in the pinned menu."""
    return [
        LinkButton("Dashboard", dashboard_link(frontend_base, user_id)),
        LinkButton("Deposit", f"{frontend_base}/deposit"),
        LinkButton("Wallet", f"{frontend_base}/wallet"),
        LinkButton("Withdraw", f"{frontend_base}/withdraw"),
        LinkButton("Lotteries", f"{frontend_base}/"),
    ]
