"""Player entity: cached summoner data for a linked PUUID."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..clock import utc_now


@dataclass
class Player:
    """Summoner profile as last seen on the Riot API."""

    puuid: str
    region: str                          # platform code used for routing
    summoner_id: Optional[str] = None
    summoner_name: Optional[str] = None
    profile_icon_id: Optional[int] = None
    summoner_level: Optional[int] = None
    updated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        return {
            'puuid': self.puuid,
            'region': self.region,
            'summoner_id': self.summoner_id,
            'summoner_name': self.summoner_name,
            'profile_icon_id': self.profile_icon_id,
            'summoner_level': self.summoner_level,
            'updated_at': self.updated_at.isoformat(),
        }
