"""Repository interfaces for data access."""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from ..entities import Match, MatchParticipant, Player, RankedStat, SyncJob, User
from ..enums import JobStatus


class IUserRepository(ABC):
    """Interface for application users."""

    @abstractmethod
    def add(self, user: User) -> User:
        pass

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_by_riot_puuid(self, puuid: str) -> Optional[User]:
        pass

    @abstractmethod
    def list_active_linked(self) -> List[User]:
        """Active users with a Riot PUUID, oldest first."""
        pass

    @abstractmethod
    def update(self, user: User) -> None:
        pass


class IPlayerRepository(ABC):
    """Interface for cached summoner profiles."""

    @abstractmethod
    def get(self, puuid: str) -> Optional[Player]:
        pass

    @abstractmethod
    def upsert(self, player: Player) -> None:
        pass


class IRankedStatRepository(ABC):
    """Interface for ranked standings, one row per (puuid, queue_type)."""

    @abstractmethod
    def upsert(self, stat: RankedStat) -> None:
        """Update the (puuid, queue_type) row in place, or insert it."""
        pass

    @abstractmethod
    def list_for_player(self, puuid: str) -> List[RankedStat]:
        pass


class IMatchRepository(ABC):
    """Interface for stored matches and their participants."""

    @abstractmethod
    def exists(self, match_id: str) -> bool:
        pass

    @abstractmethod
    def insert_match(self, match: Match) -> None:
        """Persist the match row and all of ``match.participants`` atomically."""
        pass

    @abstractmethod
    def insert_participant(self, participant: MatchParticipant) -> None:
        pass

    @abstractmethod
    def get(self, match_id: str) -> Optional[Match]:
        pass

    @abstractmethod
    def list_participants(self, match_id: str) -> List[MatchParticipant]:
        pass

    @abstractmethod
    def count(self) -> int:
        pass


class ISyncJobRepository(ABC):
    """Interface for the sync job queue.

    Only the sync orchestrator mutates jobs through this interface.
    """

    @abstractmethod
    def create_if_idle(self, job: SyncJob) -> Tuple[SyncJob, bool]:
        """Insert *job* unless its PUUID already has an active job.

        Returns ``(job, True)`` when inserted, ``(existing_active_job, False)`` otherwise.
        """
        pass

    @abstractmethod
    def get(self, job_id: int) -> Optional[SyncJob]:
        pass

    @abstractmethod
    def list_pending_oldest_first(self, limit: Optional[int] = None) -> List[SyncJob]:
        pass

    @abstractmethod
    def claim_next_pending(self, started_at: datetime) -> Optional[SyncJob]:
        """Atomically move the oldest PENDING job to PROCESSING and return it."""
        pass

    @abstractmethod
    def save_result(self, job: SyncJob) -> bool:
        """Write a terminal job. Returns False if the stored row was no longer PROCESSING."""
        pass

    @abstractmethod
    def count_by_status(self) -> Dict[JobStatus, int]:
        pass

    @abstractmethod
    def last_completed_at(self) -> Optional[datetime]:
        pass

    @abstractmethod
    def list_for_puuid(self, puuid: str) -> List[SyncJob]:
        """All jobs of a PUUID, newest first."""
        pass

    @abstractmethod
    def list_stale_processing(self, started_before: datetime) -> List[SyncJob]:
        pass
