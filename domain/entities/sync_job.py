"""SyncJob entity: one subject's synchronization attempt."""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from ..clock import utc_now
from ..enums import JobStatus, JobType
from ..errors import InvalidJobTransition


@dataclass
class SyncJob:
    """A queued or finished sync of one PUUID.

    Status only moves forward: PENDING -> PROCESSING -> COMPLETED | FAILED.
    Jobs are never deleted; finished jobs are the audit trail.
    """

    puuid: str
    job_type: JobType = JobType.FULL_SYNC
    status: JobStatus = JobStatus.PENDING
    matches_processed: int = 0
    created_at: datetime = field(default_factory=utc_now)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    error_message: Optional[str] = None

    # Assigned by the store on insert
    job_id: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def duration(self) -> Optional[timedelta]:
        if self.started_at is None or self.completed_at is None:
            return None
        return self.completed_at - self.started_at

    def _require(self, expected: JobStatus, target: JobStatus) -> None:
        if self.status is not expected:
            raise InvalidJobTransition(self.job_id, self.status.value, target.value)

    def claim(self, started_at: datetime) -> None:
        self._require(JobStatus.PENDING, JobStatus.PROCESSING)
        self.status = JobStatus.PROCESSING
        self.started_at = started_at

    def complete(self, completed_at: datetime, matches_processed: int) -> None:
        self._require(JobStatus.PROCESSING, JobStatus.COMPLETED)
        self.status = JobStatus.COMPLETED
        self.completed_at = completed_at
        self.matches_processed = matches_processed

    def fail(self, completed_at: datetime, error_message: str) -> None:
        self._require(JobStatus.PROCESSING, JobStatus.FAILED)
        self.status = JobStatus.FAILED
        self.completed_at = completed_at
        self.error_message = error_message or "Unknown error"

    def to_dict(self) -> dict:
        return {
            'job_id': self.job_id,
            'puuid': self.puuid,
            'job_type': self.job_type.value,
            'status': self.status.value,
            'matches_processed': self.matches_processed,
            'created_at': self.created_at.isoformat(),
            'started_at': self.started_at.isoformat() if self.started_at else None,
            'completed_at': self.completed_at.isoformat() if self.completed_at else None,
            'error_message': self.error_message,
        }
