from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from domain.entities import SyncJob


@dataclass(slots=True)
class SyncTriggerResult:
    """Outcome of a bulk enqueue."""
    created: int
    message: str
    jobs: List[SyncJob] = field(default_factory=list)


@dataclass(slots=True)
class SyncStatusResult:
    """Point-in-time job counts across the whole queue."""
    pending: int
    processing: int
    completed: int
    failed: int
    last_completed_at: Optional[datetime] = None

    @property
    def total(self) -> int:
        return self.pending + self.processing + self.completed + self.failed


@dataclass(slots=True)
class UserSyncHistory:
    """Sync history of one user."""
    user_id: str
    last_sync: Optional[datetime]
    total_syncs: int
    successful_syncs: int
    failed_syncs: int
    latest_job: Optional[SyncJob] = None
