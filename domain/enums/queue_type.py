"""Ranked queue type enumeration."""
from __future__ import annotations

from enum import Enum
from typing import Optional


class QueueType(Enum):
    """Ranked queues tracked per player.

    The value is the name the League v4 API uses in ``queueType``.
    """

    SOLO = "RANKED_SOLO_5x5"
    FLEX = "RANKED_FLEX_SR"

    @property
    def queue_id(self) -> int:
        """Numeric queue id used by the Match v5 API."""
        return 420 if self is QueueType.SOLO else 440

    @classmethod
    def from_api(cls, value: Optional[str]) -> Optional["QueueType"]:
        """Map an API ``queueType`` (or the short name) to a QueueType; None for untracked queues."""
        if not value:
            return None
        for member in cls:
            if value == member.value or value.upper() == member.name:
                return member
        return None
