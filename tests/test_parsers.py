"""
tests/test_parsers.py

Purpose:
    Riot payload parsing into entities, including derived participant fields.
"""

import pytest

from domain.enums import QueueType
from domain.errors import ExternalFetchFailed
from infrastructure.api.parsers import parse_account, parse_match, parse_ranked_entries, parse_summoner


def _participant(puuid, team_id=100, win=True):
    return {
        "puuid": puuid,
        "riotIdGameName": f"name-{puuid}",
        "championId": 157,
        "championName": "Yasuo",
        "champLevel": 16,
        "teamId": team_id,
        "teamPosition": "MIDDLE",
        "win": win,
        "kills": 7,
        "deaths": 0,
        "assists": 5,
        "totalMinionsKilled": 180,
        "neutralMinionsKilled": 24,
        "firstBloodKill": True,
        "item0": 3031,
        "item6": 3363,
        "summoner1Id": 4,
        "summoner2Id": 14,
        "perks": {
            "styles": [
                {"description": "primaryStyle", "style": 8000,
                 "selections": [{"perk": 8010}, {"perk": 9111}, {"perk": 9104}, {"perk": 8014}]},
                {"description": "subStyle", "style": 8400,
                 "selections": [{"perk": 8444}, {"perk": 8453}]},
            ]
        },
    }


def test_parse_match_with_participants():
    payload = {
        "metadata": {"matchId": "EUW1_123"},
        "info": {
            "gameCreation": 1_700_000_000_000,
            "gameDuration": 1925,
            "gameMode": "CLASSIC",
            "gameType": "MATCHED_GAME",
            "queueId": 420,
            "platformId": "EUW1",
            "gameVersion": "14.3.561.1234",
            "participants": [_participant("a"), _participant("b", team_id=200, win=False)],
        },
    }

    match = parse_match(payload)

    assert match.match_id == "EUW1_123"
    assert match.patch_version == "14.3"
    assert len(match.participants) == 2
    first = match.participants[0]
    assert first.match_id == "EUW1_123"
    assert first.cs == 204
    assert first.kda == 12.0
    assert first.first_blood is True
    assert first.perk_primary_style == 8000
    assert first.perk_sub_style == 8400
    assert first.perks == [8010, 9111, 9104, 8014, 8444, 8453]
    assert first.item6 == 3363
    assert match.participants[1].win is False


def test_parse_match_missing_metadata_raises():
    with pytest.raises(ExternalFetchFailed):
        parse_match({"info": {}})
    with pytest.raises(ExternalFetchFailed):
        parse_match(["not", "a", "match"])


def test_parse_ranked_entries_keeps_tracked_queues():
    entries = parse_ranked_entries([
        {"queueType": "RANKED_SOLO_5x5", "tier": "GOLD", "rank": "II", "leaguePoints": 45, "wins": 10, "losses": 8},
        {"queueType": "RANKED_FLEX_SR", "tier": "SILVER", "rank": "I", "leaguePoints": 3, "wins": 2, "losses": 4},
        {"queueType": "CHERRY", "tier": "", "rank": ""},
    ])
    assert [e.queue_type for e in entries] == [QueueType.SOLO, QueueType.FLEX]
    assert entries[0].league_points == 45

    with pytest.raises(ExternalFetchFailed):
        parse_ranked_entries({"queueType": "RANKED_SOLO_5x5"})


def test_parse_account_and_summoner():
    account = parse_account({"puuid": "p1", "gameName": "Caps", "tagLine": "EUW"})
    assert account.riot_id == "Caps#EUW"
    assert parse_account({"gameName": "x"}) is None

    summoner = parse_summoner({"puuid": "p1", "id": "sid", "profileIconId": 29, "summonerLevel": 412})
    assert summoner.summoner_id == "sid"
    assert summoner.summoner_level == 412
