"""Sync orchestrator - turns queued SyncJobs into stored ranked stats and matches."""
from __future__ import annotations

import asyncio
from datetime import timedelta
from typing import Awaitable, List, Optional, TypeVar

from core.logging import context, get_logger, job_context
from domain.clock import Clock, utc_now
from domain.entities import Player, RankedStat, SyncJob, User
from domain.enums import JobStatus, Region
from domain.errors import AlreadyQueued, InvalidJobTransition, NotLinked, PersistenceFailure, SubjectNotFound
from domain.interfaces import (
    IMatchRepository,
    IPlayerRepository,
    IRankedStatRepository,
    IRiotDataSource,
    ISyncJobRepository,
    IUserRepository,
)
from .models import SyncStatusResult, SyncTriggerResult, UserSyncHistory

T = TypeVar("T")

logger = get_logger(__name__, service="sync")


class DataSyncService:
    """
    Owns every SyncJob state change.

    Flow per job:
    - claim: oldest PENDING -> PROCESSING (conditional update in the store)
    - process: ranked entries, then the most recent match IDs; matches
      already stored are skipped without an API call
    - finish: COMPLETED or FAILED, written once, guarded on PROCESSING

    Fetch failures degrade to "no data"; only a missing subject or an
    unexpected error (persistence included) fails the job.
    """

    def __init__(
        self,
        users: IUserRepository,
        players: IPlayerRepository,
        ranked: IRankedStatRepository,
        matches: IMatchRepository,
        jobs: ISyncJobRepository,
        source: IRiotDataSource,
        *,
        matches_per_sync: int = 10,
        default_region: Region = Region.EUW1,
        clock: Clock = utc_now,
        save_attempts: int = 3,
        save_backoff: float = 0.5,
    ):
        self.users            = users
        self.players          = players
        self.ranked           = ranked
        self.matches          = matches
        self.jobs             = jobs
        self.source           = source
        self.matches_per_sync = max(1, matches_per_sync)
        self.default_region   = default_region
        self._clock           = clock
        self.save_attempts    = max(1, save_attempts)
        self.save_backoff     = save_backoff

    # ------------------------------------------------------------------ #
    # Enqueue
    # ------------------------------------------------------------------ #

    def enqueue_job_for_subject(self, user_id: str, *, strict: bool = False) -> SyncJob:
        """
        Queue a FULL_SYNC for one user.

        Returns the existing job when the user's PUUID already has a
        PENDING/PROCESSING job, or raises AlreadyQueued when *strict*.

        Raises:
            SubjectNotFound: unknown user
            NotLinked: user has no Riot account
        """
        user = self.users.get_by_id(user_id)
        if user is None:
            raise SubjectNotFound(f"User {user_id} not found.")
        if not user.is_linked:
            raise NotLinked(user_id)

        job, created = self.jobs.create_if_idle(SyncJob(puuid=user.riot_puuid, created_at=self._clock()))
        if created:
            with context(job_id=job.job_id, puuid=job.puuid):
                logger.info(lambda: f"Queued sync job {job.job_id} for user {user_id}")
            return job

        logger.info(lambda: f"Skipping sync for PUUID {user.riot_puuid}: job {job.job_id} already {job.status.value}")
        if strict:
            raise AlreadyQueued(user.riot_puuid, job.job_id)
        return job

    def enqueue_jobs_for_all_eligible_subjects(self) -> SyncTriggerResult:
        eligible = self.users.list_active_linked()
        created_jobs: List[SyncJob] = []
        for user in eligible:
            job, created = self.jobs.create_if_idle(SyncJob(puuid=user.riot_puuid, created_at=self._clock()))
            if created:
                created_jobs.append(job)
            else:
                logger.debug(lambda: f"Skipping sync for PUUID {user.riot_puuid}: active job {job.job_id} exists")

        logger.info(lambda: f"Sync triggered: {len(created_jobs)} jobs created for {len(eligible)} eligible users")
        return SyncTriggerResult(
            created=len(created_jobs),
            message=f"Created {len(created_jobs)} sync jobs",
            jobs=created_jobs,
        )

    # ------------------------------------------------------------------ #
    # Claim / process
    # ------------------------------------------------------------------ #

    def claim_next_pending_job(self) -> Optional[SyncJob]:
        job = self.jobs.claim_next_pending(self._clock())
        if job is not None:
            logger.debug(lambda: f"Claimed sync job {job.job_id} ({job.puuid})")
        return job

    async def process_job(self, job: SyncJob) -> SyncJob:
        """
        Run one claimed job to a terminal state.

        Cancellation propagates and leaves the job PROCESSING; the stale
        job reaper fails it later.
        """
        if job.status is not JobStatus.PROCESSING:
            raise InvalidJobTransition(job.job_id, job.status.value, "COMPLETED|FAILED")

        with job_context(job):
            logger.info(lambda: f"Processing sync job {job.job_id}")
            user: Optional[User] = None
            try:
                user, region = self._resolve_subject(job.puuid)
                await self._refresh_player(job.puuid, region)
                await self._sync_ranked(job.puuid, region)
                new_matches = await self._sync_matches(job.puuid, region)
                job.complete(self._clock(), new_matches)
            except Exception as exc:
                logger.exception(lambda: f"Sync job {job.job_id} failed: {exc}")
                job.fail(self._clock(), str(exc) or type(exc).__name__)

            if not await self._save_result(job):
                logger.warning(lambda: f"Sync job {job.job_id} was no longer PROCESSING; result not stored")
                return job

            if job.status is JobStatus.COMPLETED:
                user.last_sync = job.completed_at
                self.users.update(user)
                logger.success(lambda: f"Sync job {job.job_id} completed: {job.matches_processed} new matches")
        return job

    async def _save_result(self, job: SyncJob) -> bool:
        """Terminal write, retried on PersistenceFailure; the last failure propagates."""
        for attempt in range(1, self.save_attempts + 1):
            try:
                return self.jobs.save_result(job)
            except PersistenceFailure as exc:
                if attempt >= self.save_attempts:
                    raise
                logger.warning(lambda: f"Storing result of sync job {job.job_id} failed (attempt {attempt}): {exc}")
                await asyncio.sleep(self.save_backoff * attempt)
        return False

    def _resolve_subject(self, puuid: str) -> tuple[User, Region]:
        user = self.users.get_by_riot_puuid(puuid)
        if user is None:
            raise SubjectNotFound(f"No user linked to PUUID {puuid}.")
        player = self.players.get(puuid)
        code = user.region or (player.region if player else None)
        return user, Region.from_string(code, default=self.default_region)

    async def _refresh_player(self, puuid: str, region: Region) -> None:
        summoner = await self._fetch(self.source.get_summoner(puuid, region), "summoner", None)
        if summoner is None:
            return
        self.players.upsert(Player(
            puuid=puuid,
            region=region.value,
            summoner_id=summoner.summoner_id,
            summoner_name=summoner.summoner_name,
            profile_icon_id=summoner.profile_icon_id,
            summoner_level=summoner.summoner_level,
            updated_at=self._clock(),
        ))

    async def _sync_ranked(self, puuid: str, region: Region) -> None:
        entries = await self._fetch(self.source.get_ranked_entries(puuid, region), "ranked entries", [])
        if not entries:
            logger.info("No ranked data returned")
            return
        now = self._clock()
        for entry in entries:
            self.ranked.upsert(RankedStat(
                puuid=puuid,
                queue_type=entry.queue_type,
                tier=entry.tier,
                rank=entry.rank,
                league_points=entry.league_points,
                wins=entry.wins,
                losses=entry.losses,
                updated_at=now,
            ))
        logger.debug(lambda: f"Upserted {len(entries)} ranked entries")

    async def _sync_matches(self, puuid: str, region: Region) -> int:
        """Store matches not seen before; returns how many were inserted."""
        match_ids = await self._fetch(
            self.source.list_recent_match_ids(puuid, region, self.matches_per_sync), "match ids", []
        )
        inserted = 0
        for match_id in match_ids:
            if self.matches.exists(match_id):
                logger.trace(lambda: f"Match {match_id} already stored")
                continue

            match = await self._fetch(self.source.get_match_detail(match_id, region), f"match {match_id}", None)
            if match is None:
                logger.warning(lambda: f"Skipping match {match_id}: no data")
                continue

            self.matches.insert_match(match)
            inserted += 1

        logger.info(lambda: f"Stored {inserted} new of {len(match_ids)} listed matches")
        return inserted

    async def _fetch(self, call: Awaitable[T], what: str, fallback: T) -> T:
        try:
            result = await call
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning(lambda: f"Fetching {what} failed, treating as no data: {exc}")
            return fallback
        return fallback if result is None else result

    # ------------------------------------------------------------------ #
    # Reporting / maintenance
    # ------------------------------------------------------------------ #

    def get_status_snapshot(self) -> SyncStatusResult:
        counts = self.jobs.count_by_status()
        return SyncStatusResult(
            pending=counts.get(JobStatus.PENDING, 0),
            processing=counts.get(JobStatus.PROCESSING, 0),
            completed=counts.get(JobStatus.COMPLETED, 0),
            failed=counts.get(JobStatus.FAILED, 0),
            last_completed_at=self.jobs.last_completed_at(),
        )

    def get_sync_history(self, user_id: str) -> UserSyncHistory:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise SubjectNotFound(f"User {user_id} not found.")
        if not user.is_linked:
            raise NotLinked(user_id)

        history = self.jobs.list_for_puuid(user.riot_puuid)
        return UserSyncHistory(
            user_id=user_id,
            last_sync=user.last_sync,
            total_syncs=len(history),
            successful_syncs=sum(1 for j in history if j.status is JobStatus.COMPLETED),
            failed_syncs=sum(1 for j in history if j.status is JobStatus.FAILED),
            latest_job=history[0] if history else None,
        )

    def reap_stale_jobs(self, timeout: timedelta) -> List[SyncJob]:
        """Fail PROCESSING jobs started more than *timeout* ago."""
        now = self._clock()
        reaped: List[SyncJob] = []
        for job in self.jobs.list_stale_processing(now - timeout):
            job.fail(now, f"Stale: still PROCESSING after {timeout}; worker presumed dead")
            if self.jobs.save_result(job):
                reaped.append(job)
        if reaped:
            logger.warning(lambda: f"Reaped {len(reaped)} stale sync jobs: {[j.job_id for j in reaped]}")
        return reaped
