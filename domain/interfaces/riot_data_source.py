"""Interface for the external game-data provider."""
from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities import AccountInfo, Match, RankedEntry, SummonerInfo
from ..enums import Region


class IRiotDataSource(ABC):
    """Typed view of the Riot API.

    Implementations report "no data" as ``None`` / ``[]``: a missing
    record, an HTTP error and an unparseable payload look the same to callers.
    """

    @abstractmethod
    async def resolve_account(self, game_name: str, tag_line: str, region: Region) -> Optional[AccountInfo]:
        pass

    @abstractmethod
    async def get_summoner(self, puuid: str, region: Region) -> Optional[SummonerInfo]:
        pass

    @abstractmethod
    async def get_ranked_entries(self, puuid: str, region: Region) -> List[RankedEntry]:
        pass

    @abstractmethod
    async def list_recent_match_ids(self, puuid: str, region: Region, count: int) -> List[str]:
        """Most recent match IDs, newest first."""
        pass

    @abstractmethod
    async def get_match_detail(self, match_id: str, region: Region) -> Optional[Match]:
        """Match with its participants attached."""
        pass
