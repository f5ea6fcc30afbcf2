"""Lottery relay bot entry point."""

import asyncio
import logging
import signal
import sys

from lottobot.config import ConfigurationError, settings, settings_error

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
)
# httpx logs every request at INFO
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def _install_signal_handlers(stop_event: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows: fall back to KeyboardInterrupt
            pass


async def _main() -> None:
    from lottobot.bot.app import run

    stop_event = asyncio.Event()
    _install_signal_handlers(stop_event)
    await run(settings, stop_event)


def main() -> None:
    """Validate configuration and run the bot until SIGINT/SIGTERM."""
    if settings_error is not None:
        logger.error("%s", settings_error)
        sys.exit(1)
    try:
        settings.check_required()
    except ConfigurationError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    logger.info("Starting lottery relay bot (mode=%s)...", settings.mode)
    try:
        asyncio.run(_main())
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    main()
