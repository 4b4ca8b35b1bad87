from __future__ import annotations

import logging
from datetime import datetime, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from config.settings import settings
from core.models import FeedResult
from sources.orchestrator import FeedOrchestrator

log = logging.getLogger(__name__)


class FeedWarmer:
    """Re-runs the default aggregate periodically so requests hit a warm cache."""

    def __init__(self, orchestrator: FeedOrchestrator, minutes: int | None = None) -> None:
        self._orchestrator = orchestrator
        self._minutes = minutes or settings.CACHE_WARM_MINUTES
        self._scheduler = AsyncIOScheduler()
        self.last_result: FeedResult | None = None
        self.last_run: datetime | None = None

    def start(self) -> None:
        self._scheduler.add_job(
            self.warm,
            "interval",
            minutes=self._minutes,
            id="warm_feed",
            replace_existing=True,
        )
        # Also run once at startup
        self._scheduler.add_job(
            self.warm,
            "date",
            run_date=datetime.now(timezone.utc),
            id="warm_feed_init",
        )
        self._scheduler.start()
        log.info("Feed warmer started, interval %d min", self._minutes)

    def stop(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)

    def get_status(self) -> dict:
        jobs = [
            {
                "id": job.id,
                "next_run": job.next_run_time.isoformat() if job.next_run_time else None,
            }
            for job in self._scheduler.get_jobs()
        ]
        return {
            "running": self._scheduler.running,
            "last_run": self.last_run.isoformat() if self.last_run else None,
            "last_counts": self.last_result.counts if self.last_result else {},
            "jobs": jobs,
        }

    async def warm(self) -> FeedResult | None:
        log.info("Warming feed cache")
        try:
            result = await self._orchestrator.collect()
        except Exception as e:
            log.error("Feed warm-up failed: %s", e)
            return None

        self.last_result = result
        self.last_run = datetime.now(timezone.utc)
        log.info(
            "Finished warm-up | %d items | %.1fs",
            len(result.items),
            result.duration_seconds,
        )
        return result
