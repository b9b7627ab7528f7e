"""Application services root exports."""
from .models import SyncStatusResult, SyncTriggerResult, UserSyncHistory
from .sync_orchestrator import DataSyncService
from .sync_poller import PollerState, SyncPoller
from .account_link_service import AccountLinkService

__all__ = [
    "SyncStatusResult",
    "SyncTriggerResult",
    "UserSyncHistory",
    "DataSyncService",
    "PollerState",
    "SyncPoller",
    "AccountLinkService",
]
