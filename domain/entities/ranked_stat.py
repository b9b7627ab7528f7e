"""Ranked standing of a player in one queue."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..clock import utc_now
from ..enums import QueueType


@dataclass
class RankedStat:
    """One row per (puuid, queue_type); refreshed on every sync."""

    puuid: str
    queue_type: QueueType
    tier: Optional[str] = None          # IRON .. CHALLENGER
    rank: Optional[str] = None          # I .. IV
    league_points: Optional[int] = None
    wins: int = 0
    losses: int = 0
    updated_at: datetime = field(default_factory=utc_now)

    @property
    def total_games(self) -> int:
        return self.wins + self.losses

    @property
    def winrate(self) -> float:
        """Win rate in percent."""
        if self.total_games == 0:
            return 0.0
        return (self.wins / self.total_games) * 100

    def to_dict(self) -> dict:
        return {
            'puuid': self.puuid,
            'queue_type': self.queue_type.value,
            'tier': self.tier,
            'rank': self.rank,
            'league_points': self.league_points,
            'wins': self.wins,
            'losses': self.losses,
            'winrate': round(self.winrate, 2),
            'updated_at': self.updated_at.isoformat(),
        }
