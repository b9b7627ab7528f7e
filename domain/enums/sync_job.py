"""Sync job enumerations."""
from enum import Enum


class JobType(Enum):
    FULL_SYNC = "FULL_SYNC"


class JobStatus(Enum):
    """Lifecycle of a sync job: PENDING -> PROCESSING -> COMPLETED | FAILED."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_active(self) -> bool:
        return self in (JobStatus.PENDING, JobStatus.PROCESSING)

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)
