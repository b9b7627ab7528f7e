"""
tests/conftest.py

Purpose:
    Shared fixtures: repo root on sys.path, an in-memory SQLite store with
    its repositories, a deterministic clock, and a scripted Riot data source.
"""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from domain.entities import AccountInfo, Match, MatchParticipant, SummonerInfo, User  # noqa: E402
from domain.interfaces import IRiotDataSource  # noqa: E402
from infrastructure.repositories import (  # noqa: E402
    MatchRepository,
    PlayerRepository,
    RankedStatRepository,
    SQLiteDatabase,
    SyncJobRepository,
    UserRepository,
)


class FakeClock:
    """Callable clock; every reading advances one second."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)):
        self.now = start or datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


def make_match(match_id: str, participants: int = 10, puuid: str | None = None) -> Match:
    players = []
    for i in range(participants):
        players.append(MatchParticipant(
            match_id=match_id,
            puuid=puuid if (puuid and i == 0) else f"{match_id}-p{i}",
            champion_id=100 + i,
            champion_name=f"Champ{i}",
            team_id=100 if i < participants / 2 else 200,
            win=i < participants / 2,
            kills=i,
            deaths=1,
            assists=2,
            cs=150 + i,
        ))
    return Match(
        match_id=match_id,
        game_creation=1_700_000_000_000,
        game_duration=1800,
        game_mode="CLASSIC",
        game_type="MATCHED_GAME",
        queue_id=420,
        platform_id="EUW1",
        game_version="14.3.561.1234",
        participants=players,
    )


class FakeRiotSource(IRiotDataSource):
    """Scripted data source. Values that are exceptions are raised when requested."""

    def __init__(self):
        self.accounts = {}
        self.summoners = {}
        self.ranked = {}
        self.match_ids = {}
        self.details = {}
        self.detail_calls = []
        self.ranked_calls = []

    @staticmethod
    def _answer(value):
        if isinstance(value, BaseException):
            raise value
        return value

    async def resolve_account(self, game_name, tag_line, region):
        return self._answer(self.accounts.get((game_name, tag_line)))

    async def get_summoner(self, puuid, region):
        return self._answer(self.summoners.get(puuid))

    async def get_ranked_entries(self, puuid, region):
        self.ranked_calls.append((puuid, region))
        return self._answer(self.ranked.get(puuid, []))

    async def list_recent_match_ids(self, puuid, region, count):
        return list(self._answer(self.match_ids.get(puuid, [])))[:count]

    async def get_match_detail(self, match_id, region):
        self.detail_calls.append(match_id)
        return self._answer(self.details.get(match_id))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def db():
    database = SQLiteDatabase()
    yield database
    database.close()


@pytest.fixture
def repos(db):
    return SimpleNamespace(
        users=UserRepository(db),
        players=PlayerRepository(db),
        ranked=RankedStatRepository(db),
        matches=MatchRepository(db),
        jobs=SyncJobRepository(db),
    )


@pytest.fixture
def source():
    return FakeRiotSource()


@pytest.fixture
def match_factory():
    return make_match


@pytest.fixture
def linked_user(repos, clock):
    user = User(
        email="faker@example.com",
        riot_id="Faker#KR1",
        riot_puuid="puuid-faker",
        region="kr",
        created_at=clock(),
    )
    return repos.users.add(user)


@pytest.fixture
def account_info():
    return AccountInfo(puuid="puuid-caps", game_name="Caps", tag_line="EUW")


@pytest.fixture
def summoner_info():
    return SummonerInfo(puuid="puuid-caps", summoner_id="sid-caps", profile_icon_id=29, summoner_level=412)
