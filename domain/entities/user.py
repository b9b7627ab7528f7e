"""Application user and its Riot account link."""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..clock import utc_now


@dataclass
class User:
    """An application account; linked once ``riot_puuid`` is set."""

    email: str
    user_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    # Riot linkage
    riot_id: Optional[str] = None       # "gameName#tagLine"
    riot_puuid: Optional[str] = None
    region: Optional[str] = None        # platform code, e.g. euw1

    created_at: datetime = field(default_factory=utc_now)
    last_sync: Optional[datetime] = None
    is_active: bool = True

    @property
    def is_linked(self) -> bool:
        return bool(self.riot_puuid)
