"""Domain interfaces."""
from .repository import (
    IMatchRepository,
    IPlayerRepository,
    IRankedStatRepository,
    ISyncJobRepository,
    IUserRepository,
)
from .riot_data_source import IRiotDataSource

__all__ = [
    'IMatchRepository',
    'IPlayerRepository',
    'IRankedStatRepository',
    'ISyncJobRepository',
    'IUserRepository',
    'IRiotDataSource',
]
