"""Domain entities."""
from .participant import MatchParticipant
from .match import Match
from .player import Player
from .ranked_stat import RankedStat
from .riot import AccountInfo, RankedEntry, SummonerInfo
from .sync_job import SyncJob
from .user import User

__all__ = [
    'MatchParticipant',
    'Match',
    'Player',
    'RankedStat',
    'AccountInfo',
    'RankedEntry',
    'SummonerInfo',
    'SyncJob',
    'User',
]
