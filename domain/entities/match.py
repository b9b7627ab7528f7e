"""Match entity: a historical game, stored once and never refetched."""
from dataclasses import dataclass, field
from datetime import datetime

from ..clock import utc_now
from .participant import MatchParticipant


@dataclass
class Match:
    """Represents a League of Legends match."""

    # The Riot match ID (e.g. "EUW1_7212345678") is the primary key.
    match_id: str

    game_creation: int = 0      # Unix timestamp milliseconds
    game_duration: int = 0      # Seconds
    game_mode: str = ""
    game_type: str = ""
    queue_id: int = 0
    platform_id: str = ""
    game_version: str = ""

    fetched_at: datetime = field(default_factory=utc_now)

    # Filled when parsed from the API or loaded with participants
    participants: list[MatchParticipant] = field(default_factory=list)

    @property
    def patch_version(self) -> str:
        """Extract patch version (e.g., '14.3') from "14.3.561.1234"."""
        parts = self.game_version.split('.')
        if len(parts) >= 2:
            return f"{parts[0]}.{parts[1]}"
        return self.game_version
