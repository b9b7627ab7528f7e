"""Riot Games API client."""
import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional
from urllib.parse import quote

import httpx

from config import settings
from domain.enums import QueueType, Region
from .rate_limiter import EndpointRateLimiter

logger = logging.getLogger(__name__)


class RiotAPIClient:
    """Asynchronous Riot API client.

    Every request passes through the rate limiter. HTTP failures never
    raise out of this class: 404, 401/403, exhausted retries and
    non-success codes all come back as ``None``.
    """

    _APPLICATION = "application"

    def __init__(
        self,
        api_key: str,
        *,
        rate_limiter: Optional[EndpointRateLimiter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_backoff: Optional[float] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        self.api_key  = api_key
        self.session: Optional[httpx.AsyncClient] = None
        self.timeout  = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.max_retries   = max_retries if max_retries is not None else settings.MAX_RETRIES
        self.retry_backoff = retry_backoff if retry_backoff is not None else settings.RETRY_BACKOFF
        self.last_status_code: Optional[int] = None
        self._transport = transport
        self._sleep = sleep or asyncio.sleep
        self._endpoint_cooldown: Dict[str, float] = {}

        if rate_limiter is None:
            rate_limiter = EndpointRateLimiter()
            rate_limiter.set_application_limiter(
                requests_per_1_sec=settings.RATE_LIMIT_PER_1_SEC,
                requests_per_2_min=settings.RATE_LIMIT_PER_2_MIN,
            )
            self._setup_endpoint_limiters(rate_limiter)
        self.rate_limiter = rate_limiter

    @staticmethod
    def _setup_endpoint_limiters(limiter: EndpointRateLimiter) -> None:
        limiter.add_endpoint_limiter(
            "match",
            requests_per_1_sec=settings.MATCH_RATE_LIMIT_PER_1_SEC,
            requests_per_2_min=settings.MATCH_RATE_LIMIT_PER_2_MIN,
        )
        limiter.add_endpoint_limiter(
            "league",
            requests_per_1_sec=settings.LEAGUE_RATE_LIMIT_PER_1_SEC,
            requests_per_2_min=settings.LEAGUE_RATE_LIMIT_PER_2_MIN,
        )

    async def __aenter__(self):
        self.session = httpx.AsyncClient(
            timeout=self.timeout,
            headers={"X-Riot-Token": self.api_key},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_):
        if self.session:
            await self.session.aclose()
            self.session = None

    @staticmethod
    def _get_platform_url(region: Region) -> str:
        return f"https://{region.platform_route}.api.riotgames.com"

    @staticmethod
    def _get_regional_url(region: Region) -> str:
        return f"https://{region.regional_route}.api.riotgames.com"

    async def _make_request(
        self,
        url: str,
        endpoint_type: str = "default",
        params: Optional[Dict[str, Any]] = None,
    ) -> Optional[Any]:
        if self.session is None:
            raise RuntimeError("RiotAPIClient must be used as an async context manager")

        for attempt in range(self.max_retries + 1):
            # honour endpoint and application-wide cooldowns after 429
            cd = max(
                self._endpoint_cooldown.get(endpoint_type, 0.0),
                self._endpoint_cooldown.get(self._APPLICATION, 0.0),
            )
            now = time.monotonic()
            if cd > now:
                await self._sleep(cd - now)

            await self.rate_limiter.acquire(endpoint_type)

            try:
                response = await self.session.get(url, params=params)
            except httpx.TimeoutException:
                logger.warning(f"Timeout ({attempt + 1}/{self.max_retries + 1}) for {url}")
                if attempt < self.max_retries:
                    await self._sleep(self.retry_backoff ** attempt)
                    continue
                return None
            except httpx.HTTPError as exc:
                logger.error(f"Network error for {url}: {exc}")
                if attempt < self.max_retries:
                    await self._sleep(self.retry_backoff ** attempt)
                    continue
                return None

            self.last_status_code = response.status_code

            if response.status_code == 200:
                try:
                    return response.json()
                except ValueError:
                    logger.error(f"Invalid JSON from {url}")
                    return None

            if response.status_code in (401, 403):
                logger.error(f"{response.status_code}: check RIOT_API_KEY")
                return None

            if response.status_code == 404:
                return None

            if response.status_code == 429:
                try:
                    retry_after = int(response.headers.get("Retry-After", "5"))
                except ValueError:
                    retry_after = 5
                limit_type = response.headers.get("X-Rate-Limit-Type", "").lower()
                scope = self._APPLICATION if limit_type == "application" else endpoint_type
                logger.warning(f"429 rate-limited ({limit_type or 'unknown'}) on {endpoint_type}, waiting {retry_after}s")
                self._endpoint_cooldown[scope] = time.monotonic() + retry_after
                await self.rate_limiter.reset_endpoint(endpoint_type)
                continue

            if response.status_code >= 500:
                if attempt < self.max_retries:
                    await self._sleep(self.retry_backoff ** attempt)
                    continue
                logger.warning(f"HTTP {response.status_code} for {url} after {attempt + 1} attempts")
                return None

            logger.warning(f"HTTP {response.status_code} for {url}")
            return None

        return None

    # ── Account API ────────────────────────────────────────────────────

    async def get_account_by_riot_id(
        self, region: Region, game_name: str, tag_line: str
    ) -> Optional[Dict]:
        base = self._get_regional_url(region)
        path = f"/riot/account/v1/accounts/by-riot-id/{quote(game_name, safe='')}/{quote(tag_line, safe='')}"
        return await self._make_request(f"{base}{path}", "account")

    # ── Summoner API ───────────────────────────────────────────────────

    async def get_summoner_by_puuid(self, region: Region, puuid: str) -> Optional[Dict]:
        base = self._get_platform_url(region)
        return await self._make_request(f"{base}/lol/summoner/v4/summoners/by-puuid/{puuid}", "summoner")

    # ── League API ─────────────────────────────────────────────────────

    async def get_league_entries_by_puuid(
        self, region: Region, puuid: str
    ) -> Optional[List[Dict]]:
        base = self._get_platform_url(region)
        result = await self._make_request(f"{base}/lol/league/v4/entries/by-puuid/{puuid}", "league")
        return result if isinstance(result, list) else None

    # ── Match API ──────────────────────────────────────────────────────

    async def get_match_ids_by_puuid(
        self,
        region: Region,
        puuid: str,
        count: int = 20,
        start: int = 0,
        queue: Optional[QueueType] = None,
    ) -> List[str]:
        base = self._get_regional_url(region)
        params: Dict[str, Any] = {"start": max(0, start), "count": max(1, min(count, 100))}
        if queue is not None:
            params["queue"] = queue.queue_id
        url    = f"{base}/lol/match/v5/matches/by-puuid/{puuid}/ids"
        result = await self._make_request(url, "match", params=params)
        return result if isinstance(result, list) else []

    async def get_match_by_id(self, region: Region, match_id: str) -> Optional[Dict]:
        base = self._get_regional_url(region)
        return await self._make_request(f"{base}/lol/match/v5/matches/{match_id}", "match")
