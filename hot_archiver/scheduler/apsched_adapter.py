"""APScheduler wrapper running the crawl → archive cycle on a cron cadence."""

from __future__ import annotations

from typing import Callable

import structlog
from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_MAX_INSTANCES, JobEvent
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from ..config import ScheduleConfig

CYCLE_JOB_ID = "hot::cycle"


class APSchedulerAdapter:
    """Manage the single cycle job.

    The job runs with ``max_instances=1`` so a firing is skipped while the
    previous one is still running. Exceptions escaping the callback are
    logged by the listener and do not stop later firings.
    """

    def __init__(self, blocking: bool = False, logger: structlog.BoundLogger | None = None) -> None:
        self.scheduler: BaseScheduler = BlockingScheduler() if blocking else BackgroundScheduler()
        self.logger = (logger or structlog.get_logger("hot_archiver.scheduler")).bind(
            component="scheduler"
        )
        self.started = False
        self.scheduler.add_listener(self._on_job_event, EVENT_JOB_ERROR | EVENT_JOB_MAX_INSTANCES)

    def start(self) -> None:
        if not self.started:
            self.started = True
            self.logger.info("apscheduler_started")
            # BlockingScheduler.start() only returns after shutdown
            self.scheduler.start()

    def shutdown(self) -> None:
        if self.started:
            self.scheduler.shutdown(wait=False)
            self.started = False
            self.logger.info("apscheduler_stopped")

    def schedule_cycle(self, callback: Callable[[], None], schedule: ScheduleConfig) -> None:
        trigger = self._build_trigger(schedule)
        self.scheduler.add_job(
            callback,
            trigger=trigger,
            id=CYCLE_JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.logger.info("job_scheduled", cron=schedule.cron, timezone=schedule.timezone)

    @staticmethod
    def _build_trigger(schedule: ScheduleConfig) -> CronTrigger:
        return CronTrigger.from_crontab(schedule.cron, timezone=schedule.tzinfo)

    def _on_job_event(self, event: JobEvent) -> None:
        if event.code == EVENT_JOB_MAX_INSTANCES:
            self.logger.warning("job_skipped_still_running", job_id=event.job_id)
        else:
            self.logger.error(
                "job_failed",
                job_id=event.job_id,
                error=repr(getattr(event, "exception", None)),
            )

    def list_jobs(self) -> list[dict]:
        jobs = []
        for job in self.scheduler.get_jobs():
            jobs.append(
                {
                    "id": job.id,
                    "next_run_time": getattr(job, "next_run_time", None),
                    "trigger": str(job.trigger),
                }
            )
        return jobs


__all__ = ["APSchedulerAdapter", "CYCLE_JOB_ID"]
