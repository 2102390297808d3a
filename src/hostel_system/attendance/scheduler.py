from __future__ import annotations

import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from ..common.datetime_utils import Clock
from ..core.constants import DEFAULT_SWEEP_HOUR, DEFAULT_SWEEP_MINUTE
from .sweeper import AbsenceSweeper

logger = logging.getLogger(__name__)

NIGHTLY_SWEEP_JOB_ID = "nightly-absence-sweep"


def build_scheduler(
    sweeper: AbsenceSweeper,
    clock: Clock,
    *,
    hour: int = DEFAULT_SWEEP_HOUR,
    minute: int = DEFAULT_SWEEP_MINUTE,
) -> BackgroundScheduler:
    """Daily cron job in the clock's timezone. The caller starts and stops it."""

    scheduler = BackgroundScheduler(timezone=clock.tzinfo)

    def nightly_sweep() -> None:
        try:
            sweeper.run_nightly_sweep(clock.now())
        except Exception:
            # Already logged by the sweeper; tomorrow's run starts fresh.
            logger.error("Nightly sweep failed; it will run again at the next scheduled time")

    scheduler.add_job(
        nightly_sweep,
        trigger=CronTrigger(hour=hour, minute=minute, timezone=clock.tzinfo),
        id=NIGHTLY_SWEEP_JOB_ID,
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    logger.info("Nightly sweep scheduled at %02d:%02d %s", hour, minute, clock.timezone)
    return scheduler
