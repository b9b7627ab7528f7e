"""Typed Riot data source backed by RiotAPIClient."""
import logging
from typing import List, Optional

from domain.entities import AccountInfo, Match, RankedEntry, SummonerInfo
from domain.enums import Region
from domain.errors import ExternalFetchFailed
from domain.interfaces import IRiotDataSource
from .parsers import parse_account, parse_match, parse_ranked_entries, parse_summoner
from .riot_client import RiotAPIClient

logger = logging.getLogger(__name__)


class RiotDataGateway(IRiotDataSource):
    """Turns raw client responses into entities; anything unusable becomes "no data"."""

    def __init__(self, api_client: RiotAPIClient):
        self.api_client = api_client

    async def resolve_account(self, game_name: str, tag_line: str, region: Region) -> Optional[AccountInfo]:
        data = await self.api_client.get_account_by_riot_id(region, game_name, tag_line)
        if not data:
            return None
        try:
            return parse_account(data)
        except ExternalFetchFailed as exc:
            logger.warning(f"Unreadable account payload for {game_name}#{tag_line}: {exc}")
            return None

    async def get_summoner(self, puuid: str, region: Region) -> Optional[SummonerInfo]:
        data = await self.api_client.get_summoner_by_puuid(region, puuid)
        if not data:
            return None
        try:
            return parse_summoner(data)
        except ExternalFetchFailed as exc:
            logger.warning(f"Unreadable summoner payload for {puuid}: {exc}")
            return None

    async def get_ranked_entries(self, puuid: str, region: Region) -> List[RankedEntry]:
        data = await self.api_client.get_league_entries_by_puuid(region, puuid)
        if not data:
            return []
        try:
            return parse_ranked_entries(data)
        except ExternalFetchFailed as exc:
            logger.warning(f"Unreadable league entries for {puuid}: {exc}")
            return []

    async def list_recent_match_ids(self, puuid: str, region: Region, count: int) -> List[str]:
        ids = await self.api_client.get_match_ids_by_puuid(region, puuid, count=count)
        return [i for i in ids if isinstance(i, str) and i]

    async def get_match_detail(self, match_id: str, region: Region) -> Optional[Match]:
        data = await self.api_client.get_match_by_id(region, match_id)
        if not data:
            logger.warning(f"Match {match_id} not available from API")
            return None
        try:
            return parse_match(data)
        except ExternalFetchFailed as exc:
            logger.error(f"Error parsing match {match_id}: {exc}")
            return None
