"""Infrastructure layer - API clients and repositories."""
from .api import RiotAPIClient, RateLimiter, EndpointRateLimiter, RiotDataGateway
from .repositories import (
    SQLiteDatabase,
    MatchRepository,
    PlayerRepository,
    RankedStatRepository,
    SyncJobRepository,
    UserRepository,
)

__all__ = [
    'RiotAPIClient',
    'RateLimiter',
    'EndpointRateLimiter',
    'RiotDataGateway',
    'SQLiteDatabase',
    'MatchRepository',
    'PlayerRepository',
    'RankedStatRepository',
    'SyncJobRepository',
    'UserRepository',
]
