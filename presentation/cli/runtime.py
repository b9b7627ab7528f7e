from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import timedelta
from pathlib import Path
from typing import AsyncIterator, Optional

from config import settings
from domain.enums import Region
from domain.interfaces import IRiotDataSource
from infrastructure import (
    MatchRepository,
    PlayerRepository,
    RankedStatRepository,
    RiotAPIClient,
    RiotDataGateway,
    SQLiteDatabase,
    SyncJobRepository,
    UserRepository,
)
from application import AccountLinkService, DataSyncService, SyncJobsUseCase, SyncPoller


class SyncRuntime:
    """Database, repositories and services shared by the CLI commands and scripts."""

    def __init__(self, db_path: Optional[Path] = None) -> None:
        self.db      = SQLiteDatabase(db_path or settings.DB_PATH)
        self.users   = UserRepository(self.db)
        self.players = PlayerRepository(self.db)
        self.ranked  = RankedStatRepository(self.db)
        self.matches = MatchRepository(self.db)
        self.jobs    = SyncJobRepository(self.db)
        self.default_region = Region.from_string(settings.DEFAULT_REGION)

    @asynccontextmanager
    async def riot_source(self) -> AsyncIterator[IRiotDataSource]:
        settings.validate()
        async with RiotAPIClient(settings.RIOT_API_KEY) as api:
            yield RiotDataGateway(api)

    def offline_source(self) -> IRiotDataSource:
        """A gateway whose client is never opened; enough for enqueue and status calls."""
        return RiotDataGateway(RiotAPIClient(settings.RIOT_API_KEY))

    def sync_service(self, source: IRiotDataSource) -> DataSyncService:
        return DataSyncService(
            self.users, self.players, self.ranked, self.matches, self.jobs, source,
            matches_per_sync=settings.MATCHES_PER_SYNC,
            default_region=self.default_region,
        )

    def sync_use_case(self) -> SyncJobsUseCase:
        return SyncJobsUseCase(self.sync_service(self.offline_source()))

    def link_service(self, source: IRiotDataSource) -> AccountLinkService:
        return AccountLinkService(self.users, self.players, source, default_region=self.default_region)

    def poller(self, source: IRiotDataSource) -> SyncPoller:
        stale = settings.SYNC_STALE_JOB_MINUTES
        return SyncPoller(
            self.sync_service(source),
            idle_interval=settings.SYNC_IDLE_INTERVAL,
            job_interval=settings.SYNC_JOB_INTERVAL,
            error_backoff=settings.SYNC_ERROR_BACKOFF,
            stale_job_timeout=timedelta(minutes=stale) if stale > 0 else None,
        )

    def close(self) -> None:
        self.db.close()
