"""Update ingestion — long-poll or webhook, one per process."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lottobot.ingestion.base import UpdateSource
from lottobot.ingestion.polling import PollingSource
from lottobot.ingestion.webhook import WebhookSource

if TYPE_CHECKING:
    from telegram.ext import Application

    from lottobot.config import Settings


def build_source(app: Application, config: Settings) -> UpdateSource:
    """Pick the ingestion mode configured for this process."""
    if config.use_webhook:
        return WebhookSource(app, config.webhook_url, config.webhook_path, config.port)
    return PollingSource(app)


__all__ = [
    "PollingSource",
    "UpdateSource",
    "WebhookSource",
    "build_source",
]
