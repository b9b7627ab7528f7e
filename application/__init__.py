"""Application layer - Services and use cases."""
from .services import AccountLinkService, DataSyncService, SyncPoller
from .use_cases import SyncJobsUseCase

__all__ = [
    'AccountLinkService',
    'DataSyncService',
    'SyncPoller',
    'SyncJobsUseCase',
]
