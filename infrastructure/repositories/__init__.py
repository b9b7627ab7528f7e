"""Infrastructure repositories module."""
from .database import SQLiteDatabase
from .match_repository import MatchRepository
from .ranked_stat_repository import RankedStatRepository
from .sync_job_repository import SyncJobRepository
from .user_repository import PlayerRepository, UserRepository

__all__ = [
    'SQLiteDatabase',
    'MatchRepository',
    'PlayerRepository',
    'RankedStatRepository',
    'SyncJobRepository',
    'UserRepository',
]
