"""Application use cases."""
from .sync_jobs import SyncJobsUseCase

__all__ = [
    'SyncJobsUseCase',
]
