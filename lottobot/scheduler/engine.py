"""ReminderScheduler — APScheduler lifecycle for the daily reminder job."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

if TYPE_CHECKING:
    from apscheduler.job import Job

    from lottobot.scheduler.broadcast import ReminderBroadcaster

logger = logging.getLogger(__name__)

REMINDER_JOB_ID = "daily_reminders"


class ReminderScheduler:
    """Runs the broadcaster on a crontab schedule.

    Args:
        broadcaster: What to run on each firing.
        cron: Five-field crontab expression.
        timezone: IANA zone name; empty means the system zone.
    """

    def __init__(
        self,
        broadcaster: ReminderBroadcaster,
        cron: str = "0 9 * * *",
        timezone: str | None = None,
    ) -> None:
        self._broadcaster = broadcaster
        self._cron = cron
        self._timezone = timezone or None
        if self._timezone:
            self._scheduler = AsyncIOScheduler(timezone=self._timezone)
        else:
            self._scheduler = AsyncIOScheduler()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def build_trigger(self) -> CronTrigger:
        """Raises ValueError for a malformed crontab expression."""
        return CronTrigger.from_crontab(self._cron, timezone=self._timezone)

    def job(self) -> Job | None:
        return self._scheduler.get_job(REMINDER_JOB_ID)

    # -- Lifecycle -------------------------------------------------------------

    async def start(self) -> None:
        """Add the reminder job and start the scheduler (needs a running loop)."""
        self._scheduler.add_job(
            self._broadcaster.run,
            trigger=self.build_trigger(),
            id=REMINDER_JOB_ID,
            name="Daily reminders",
            misfire_grace_time=None,
            coalesce=True,
            replace_existing=True,
        )
        self._scheduler.start()
        self._running = True
        logger.info(
            "Reminder scheduler started (cron=%s, tz=%s)",
            self._cron,
            self._timezone or "system",
        )

    async def stop(self) -> None:
        if self._running:
            self._scheduler.shutdown(wait=False)
            self._running = False
            logger.info("Reminder scheduler stopped")
