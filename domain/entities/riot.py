"""Typed results of Riot API lookups, before they are persisted."""
from dataclasses import dataclass
from typing import Optional

from ..enums import QueueType


@dataclass(frozen=True)
class AccountInfo:
    """Account v1: Riot ID -> PUUID."""
    puuid: str
    game_name: str
    tag_line: str

    @property
    def riot_id(self) -> str:
        return f"{self.game_name}#{self.tag_line}"


@dataclass(frozen=True)
class SummonerInfo:
    """Summoner v4 profile fields cached on the Player row."""
    puuid: str
    summoner_id: Optional[str] = None
    summoner_name: Optional[str] = None
    profile_icon_id: Optional[int] = None
    summoner_level: Optional[int] = None


@dataclass(frozen=True)
class RankedEntry:
    """League v4 entry for one ranked queue."""
    queue_type: QueueType
    tier: str
    rank: str
    league_points: int
    wins: int
    losses: int
