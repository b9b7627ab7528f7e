"""Domain layer - Business entities, enums, errors and interfaces."""
from .entities import (
    AccountInfo, Match, MatchParticipant, Player, RankedEntry,
    RankedStat, SummonerInfo, SyncJob, User,
)
from .enums import Region, QueueType, JobStatus, JobType
from .interfaces import (
    IMatchRepository, IPlayerRepository, IRankedStatRepository,
    IRiotDataSource, ISyncJobRepository, IUserRepository,
)

__all__ = [
    # Entities
    'AccountInfo',
    'Match',
    'MatchParticipant',
    'Player',
    'RankedEntry',
    'RankedStat',
    'SummonerInfo',
    'SyncJob',
    'User',
    # Enums
    'Region',
    'QueueType',
    'JobStatus',
    'JobType',
    # Interfaces
    'IMatchRepository',
    'IPlayerRepository',
    'IRankedStatRepository',
    'IRiotDataSource',
    'ISyncJobRepository',
    'IUserRepository',
]
