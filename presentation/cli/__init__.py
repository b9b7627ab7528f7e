"""Presentation CLI exports."""
from .runtime import SyncRuntime
from .link_account_command import LinkAccountCommand
from .sync_command import SyncCommand
from .worker_command import WorkerCommand
from .db_check_command import DBCheckCommand

__all__ = [
    "SyncRuntime",
    "LinkAccountCommand",
    "SyncCommand",
    "WorkerCommand",
    "DBCheckCommand",
]
