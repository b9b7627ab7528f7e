"""Presentation layer - User interfaces."""
from .cli import SyncRuntime, LinkAccountCommand, SyncCommand, WorkerCommand, DBCheckCommand

__all__ = [
    "SyncRuntime",
    "LinkAccountCommand",
    "SyncCommand",
    "WorkerCommand",
    "DBCheckCommand",
]
