"""Domain errors raised by the sync pipeline and account linking."""
from __future__ import annotations

from typing import Optional


class SyncError(Exception):
    """Base class for every error this application raises on purpose."""


class NotLinked(SyncError):
    """The user has no verified Riot account, so there is nothing to sync."""

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} has no linked Riot account.")
        self.user_id = user_id


class AlreadyQueued(SyncError):
    """An active (PENDING/PROCESSING) job already exists for the PUUID."""

    def __init__(self, puuid: str, job_id: Optional[int] = None):
        super().__init__(f"PUUID {puuid} already has an active sync job ({job_id}).")
        self.puuid = puuid
        self.job_id = job_id


class SubjectNotFound(SyncError):
    def __init__(self, message: str):
        super().__init__(message)


class ExternalFetchFailed(SyncError):
    """A Riot API call returned something unusable. Recovered as "no data"."""


class PersistenceFailure(SyncError):
    """A repository write or read failed at the database level."""


class InvalidJobTransition(SyncError):
    def __init__(self, job_id: Optional[int], current: str, target: str):
        super().__init__(f"Sync job {job_id} cannot move from {current} to {target}.")
        self.job_id = job_id
        self.current = current
        self.target = target


class InvalidRiotId(SyncError):
    def __init__(self, riot_id: str):
        super().__init__(f"'{riot_id}' is not a Riot ID; expected 'gameName#tagLine'.")
        self.riot_id = riot_id


class AccountNotFound(SyncError):
    def __init__(self, riot_id: str, region: str):
        super().__init__(f"Riot account {riot_id} was not found ({region}).")
        self.riot_id = riot_id
        self.region = region


class AccountAlreadyLinked(SyncError):
    def __init__(self, puuid: str, owner_id: str):
        super().__init__(f"Riot account {puuid} is already linked to user {owner_id}.")
        self.puuid = puuid
        self.owner_id = owner_id
