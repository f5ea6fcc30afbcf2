"""Scheduled reminders — broadcast fan-out and cron scheduling."""

from lottobot.scheduler.broadcast import REMINDERS, ReminderBroadcaster
from lottobot.scheduler.engine import ReminderScheduler

__all__ = [
    "REMINDERS",
    "ReminderBroadcaster",
    "ReminderScheduler",
]
