"""Recurring trigger for batch portfolio snapshots."""

import logging
from typing import Callable

from apscheduler.events import EVENT_JOB_ERROR, JobExecutionEvent
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from stellar_portfolio.domain.views import SnapshotRunResult

logger = logging.getLogger(__name__)

SNAPSHOT_JOB_ID = "portfolio_snapshots"


class SnapshotScheduler:
    """
    Runs the batch snapshot entry point on a fixed interval.

    The job calls exactly the same callable as a manual trigger.
    """

    def __init__(
        self,
        run_snapshots: Callable[[], SnapshotRunResult],
        interval_minutes: int = 60,
    ):
        if interval_minutes < 1:
            raise ValueError("interval_minutes must be >= 1")
        self._run_snapshots = run_snapshots
        self._interval_minutes = interval_minutes
        self.scheduler = BackgroundScheduler(timezone="UTC")
        self.scheduler.add_listener(self._on_job_error, EVENT_JOB_ERROR)

    @property
    def is_running(self) -> bool:
        return self.scheduler.running

    def start(self) -> None:
        """Register the snapshot job and start the scheduler thread."""
        if self.scheduler.running:
            return
        self.scheduler.add_job(
            self._run_snapshots,
            trigger=IntervalTrigger(minutes=self._interval_minutes),
            id=SNAPSHOT_JOB_ID,
            name="Portfolio snapshots for all users",
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info("Snapshot scheduler started (every %d minutes)", self._interval_minutes)

    def shutdown(self) -> None:
        """Stop the scheduler, waiting for a running job to finish."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=True)
            logger.info("Snapshot scheduler stopped")

    @staticmethod
    def _on_job_error(event: JobExecutionEvent) -> None:
        logger.error(
            "Scheduled job %s failed: %s",
            event.job_id, event.exception,
        )
