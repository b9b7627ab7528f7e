"""Background poller - drains the sync queue one job at a time."""
from __future__ import annotations

import asyncio
from datetime import timedelta
from enum import Enum
from typing import Optional

from core.logging import get_logger
from .sync_orchestrator import DataSyncService

logger = get_logger(__name__, service="worker")


class PollerState(Enum):
    IDLE = "IDLE"
    CLAIMING = "CLAIMING"
    PROCESSING = "PROCESSING"
    STOPPED = "STOPPED"


class SyncPoller:
    """
    Single consumer loop over the job queue.

    Jobs are never processed in parallel: the Riot rate limit is global,
    so a second worker would only compete for the same budget.
    Shutdown is observed between iterations and during every wait.
    """

    def __init__(
        self,
        service: DataSyncService,
        *,
        idle_interval: float = 30.0,
        job_interval: float = 2.0,
        error_backoff: float = 10.0,
        stale_job_timeout: Optional[timedelta] = None,
        reap_interval: float = 60.0,
    ):
        self.service           = service
        self.idle_interval     = idle_interval
        self.job_interval      = job_interval
        self.error_backoff     = error_backoff
        self.stale_job_timeout = stale_job_timeout
        self.reap_interval     = reap_interval
        self._stop_event       = asyncio.Event()
        self._state            = PollerState.IDLE
        self.jobs_processed    = 0
        self._last_reap: Optional[float] = None

    @property
    def state(self) -> PollerState:
        return self._state

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def stop(self) -> None:
        self._stop_event.set()

    async def run_once(self) -> bool:
        """Claim and process at most one job. True when a job was processed."""
        self._state = PollerState.CLAIMING
        job = self.service.claim_next_pending_job()
        if job is None:
            self._state = PollerState.IDLE
            return False

        self._state = PollerState.PROCESSING
        try:
            await self.service.process_job(job)
        finally:
            self._state = PollerState.IDLE
        self.jobs_processed += 1
        return True

    async def run(self, stop_event: Optional[asyncio.Event] = None) -> None:
        if stop_event is not None:
            self._stop_event = stop_event

        logger.info("Sync worker started")
        self._reap_if_due()
        try:
            while not self.stopped:
                try:
                    processed = await self.run_once()
                    delay = self.job_interval if processed else self.idle_interval
                except Exception as exc:
                    logger.exception(lambda: f"Error in sync worker loop: {exc}")
                    self._state = PollerState.IDLE
                    delay = self.error_backoff
                await self._wait(delay)
                self._reap_if_due()
        finally:
            self._state = PollerState.STOPPED
            logger.info(lambda: f"Sync worker stopped after {self.jobs_processed} jobs")

    def _reap_if_due(self) -> None:
        """Fail stale PROCESSING jobs on start, then at most once per reap_interval."""
        if not self.stale_job_timeout:
            return
        now = asyncio.get_running_loop().time()
        if self._last_reap is not None and now - self._last_reap < self.reap_interval:
            return
        self._last_reap = now
        try:
            self.service.reap_stale_jobs(self.stale_job_timeout)
        except Exception as exc:
            logger.exception(lambda: f"Stale job reaper failed: {exc}")

    async def _wait(self, delay: float) -> None:
        if delay <= 0 or self.stopped:
            return
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            pass
