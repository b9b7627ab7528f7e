"""Infrastructure API module."""
from .riot_client import RiotAPIClient
from .rate_limiter import RateLimiter, EndpointRateLimiter
from .riot_gateway import RiotDataGateway

__all__ = [
    'RiotAPIClient',
    'RateLimiter',
    'EndpointRateLimiter',
    'RiotDataGateway',
]
