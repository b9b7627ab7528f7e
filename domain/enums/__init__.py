"""Domain enumerations."""
from .region import Region
from .queue_type import QueueType
from .sync_job import JobStatus, JobType

__all__ = [
    'Region',
    'QueueType',
    'JobStatus',
    'JobType',
]
