"""
SCHEDULER BOOTSTRAP

Initializes and manages the APScheduler instance that re-evaluates the
runner board on a fixed interval, so scheduled news and price changes
appear without any write to the store.
Scheduler is orchestration-only and contains no business logic.
"""

import logging
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

import pytz

from timeless.realtime.runtime import BoardRuntime

_logger = logging.getLogger(__name__)

BOARD_REFRESH_JOB_ID = "board_refresh_job"


class BoardTicker:
    """Periodic board re-evaluation"""

    def __init__(self, runtime: BoardRuntime, interval_seconds: int = 1, timezone: str = "UTC"):
        self.runtime = runtime
        self.interval_seconds = max(1, int(interval_seconds))
        self.scheduler = AsyncIOScheduler(timezone=pytz.timezone(timezone))

    def start(self) -> None:
        """
        Register the refresh job and start the scheduler.
        Must be called from a running event loop.
        """
        if self.scheduler.running:
            return

        # ------------------------------------------------------------
        # BOARD REFRESH JOB
        # ------------------------------------------------------------
        self.scheduler.add_job(
            self.run_refresh_job,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=BOARD_REFRESH_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

        self.scheduler.start()
        _logger.info("✅ Board ticker started (every %ss)", self.interval_seconds)

    def stop(self) -> None:
        """
        Shutdown the scheduler safely.
        """
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            _logger.info("🛑 Board ticker shut down")

    async def run_refresh_job(self) -> None:
        """Thin wrapper: log failures, never let the job die"""
        try:
            if await self.runtime.refresh():
                _logger.debug("Runner board changed on tick")
        except Exception:
            _logger.exception("Board refresh job failed")
