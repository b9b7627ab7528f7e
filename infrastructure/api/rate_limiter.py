"""Rate limiter matching Riot API's documented limits."""
import asyncio
import logging
import time
from collections import deque
from typing import Awaitable, Callable, Deque, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]

SHORT_WINDOW_S = 1.0
LONG_WINDOW_S = 120.0


class RateLimiter:
    """
    Sliding-window rate limiter with two windows:
      - Short : N requests per 1 second
      - Long  : M requests per 120 seconds (Riot's 2-minute window)

    ``acquire`` only returns once both windows have room, so any sequence
    of calls stays under both ceilings no matter how fast the caller loops.
    """

    def __init__(
        self,
        requests_per_1_sec: int = 18,
        requests_per_2_min: int = 90,
        *,
        clock: Clock = time.monotonic,
        sleep: Optional[Sleep] = None,
    ):
        if requests_per_1_sec < 1 or requests_per_2_min < 1:
            raise ValueError("rate limits must be positive")
        self.requests_per_1_sec = requests_per_1_sec
        self.requests_per_2_min = requests_per_2_min
        self._clock = clock
        self._sleep = sleep or asyncio.sleep

        self._times_1s:   Deque[float] = deque()
        self._times_2min: Deque[float] = deque()
        self._lock = asyncio.Lock()

    def _evict(self, now: float) -> None:
        while self._times_1s and now - self._times_1s[0] >= SHORT_WINDOW_S:
            self._times_1s.popleft()
        while self._times_2min and now - self._times_2min[0] >= LONG_WINDOW_S:
            self._times_2min.popleft()

    async def acquire(self) -> None:
        async with self._lock:
            while True:
                now = self._clock()
                self._evict(now)

                ok_1s   = len(self._times_1s)   < self.requests_per_1_sec
                ok_2min = len(self._times_2min) < self.requests_per_2_min

                if ok_1s and ok_2min:
                    self._times_1s.append(now)
                    self._times_2min.append(now)
                    return

                wait = 0.0
                if not ok_1s:
                    wait = max(wait, SHORT_WINDOW_S - (now - self._times_1s[0]))
                if not ok_2min:
                    wait = max(wait, LONG_WINDOW_S - (now - self._times_2min[0]))
                wait = max(wait, 0.01)

                logger.debug(f"Rate limit: waiting {wait:.2f}s")
                await self._sleep(wait)

    def get_status(self) -> Tuple[int, int, int, int]:
        """(used_1s, limit_1s, used_2min, limit_2min) at this instant."""
        now = self._clock()
        used_1s   = sum(1 for t in self._times_1s   if now - t < SHORT_WINDOW_S)
        used_2min = sum(1 for t in self._times_2min if now - t < LONG_WINDOW_S)
        return used_1s, self.requests_per_1_sec, used_2min, self.requests_per_2_min

    async def reset(self) -> None:
        async with self._lock:
            self._times_1s.clear()
            self._times_2min.clear()


class EndpointRateLimiter:
    """Application-wide limiter plus optional stricter per-endpoint limiters.

    Riot counts every call against the application limit, so each request
    takes a slot from the shared limiter first and then from its endpoint's.
    """

    def __init__(self, *, clock: Clock = time.monotonic, sleep: Optional[Sleep] = None):
        self._clock = clock
        self._sleep = sleep
        self.limiters: Dict[str, RateLimiter] = {}
        self._app: Optional[RateLimiter] = None

    def _make(self, per_1_sec: int, per_2_min: int) -> RateLimiter:
        return RateLimiter(per_1_sec, per_2_min, clock=self._clock, sleep=self._sleep)

    def set_application_limiter(
        self,
        requests_per_1_sec: int = 18,
        requests_per_2_min: int = 90,
    ) -> None:
        self._app = self._make(requests_per_1_sec, requests_per_2_min)

    def add_endpoint_limiter(
        self,
        endpoint: str,
        requests_per_1_sec: int,
        requests_per_2_min: int,
    ) -> None:
        self.limiters[endpoint] = self._make(requests_per_1_sec, requests_per_2_min)

    async def acquire(self, endpoint: str = "default") -> None:
        limiter = self.limiters.get(endpoint)
        if limiter is not None:
            await limiter.acquire()
        if self._app is not None:
            await self._app.acquire()

    async def reset_endpoint(self, endpoint: str = "default") -> None:
        limiter = self.limiters.get(endpoint)
        if limiter is not None:
            await limiter.reset()

    def get_status(self, endpoint: Optional[str] = None) -> Optional[Tuple[int, int, int, int]]:
        limiter = self.limiters.get(endpoint) if endpoint else self._app
        return limiter.get_status() if limiter else None
