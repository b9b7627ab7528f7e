"""Parse raw Riot API payloads into domain entities."""
from typing import Any, Dict, List, Optional

from domain.entities import AccountInfo, Match, MatchParticipant, RankedEntry, SummonerInfo
from domain.enums import QueueType
from domain.errors import ExternalFetchFailed


def _require_dict(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ExternalFetchFailed(f"{what}: expected an object, got {type(data).__name__}")
    return data


def parse_account(data: Any) -> Optional[AccountInfo]:
    data = _require_dict(data, "account")
    puuid = data.get('puuid')
    if not puuid:
        return None
    return AccountInfo(
        puuid=puuid,
        game_name=data.get('gameName', ''),
        tag_line=data.get('tagLine', ''),
    )


def parse_summoner(data: Any) -> Optional[SummonerInfo]:
    data = _require_dict(data, "summoner")
    puuid = data.get('puuid')
    if not puuid:
        return None
    return SummonerInfo(
        puuid=puuid,
        summoner_id=data.get('id'),
        # Summoner names were retired for Riot IDs; older payloads still carry one.
        summoner_name=data.get('name'),
        profile_icon_id=data.get('profileIconId'),
        summoner_level=data.get('summonerLevel'),
    )


def parse_ranked_entries(data: Any) -> List[RankedEntry]:
    """League entries for tracked queues; other queues (Arena, TFT...) are dropped."""
    if not isinstance(data, list):
        raise ExternalFetchFailed("ranked entries: expected a list")
    entries: List[RankedEntry] = []
    for raw in data:
        if not isinstance(raw, dict):
            continue
        queue_type = QueueType.from_api(raw.get('queueType'))
        if queue_type is None:
            continue
        entries.append(RankedEntry(
            queue_type=queue_type,
            tier=raw.get('tier', ''),
            rank=raw.get('rank', ''),
            league_points=int(raw.get('leaguePoints', 0)),
            wins=int(raw.get('wins', 0)),
            losses=int(raw.get('losses', 0)),
        ))
    return entries


def parse_match(data: Any) -> Match:
    """Parse a Match v5 payload into a Match with its participants."""
    data = _require_dict(data, "match")
    try:
        metadata = data['metadata']
        info = data['info']
        match_id = metadata['matchId']
    except (KeyError, TypeError) as exc:
        raise ExternalFetchFailed(f"match payload missing {exc}") from exc

    match = Match(
        match_id=match_id,
        game_creation=info.get('gameCreation', 0),
        game_duration=info.get('gameDuration', 0),
        game_mode=info.get('gameMode', ''),
        game_type=info.get('gameType', ''),
        queue_id=info.get('queueId', 0),
        platform_id=info.get('platformId', ''),
        game_version=info.get('gameVersion', ''),
    )
    match.participants = [
        _parse_participant(match_id, p) for p in info.get('participants', []) if isinstance(p, dict)
    ]
    return match


def _perk_styles(perks: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    styles = perks.get('styles') or []
    return {s.get('description'): s for s in styles if isinstance(s, dict)}


def _parse_participant(match_id: str, p: Dict[str, Any]) -> MatchParticipant:
    styles = _perk_styles(p.get('perks') or {})
    primary = styles.get('primaryStyle', {})
    sub = styles.get('subStyle', {})
    # Four keystone-tree picks followed by two secondary-tree picks
    selections = [s.get('perk') for s in primary.get('selections', [])]
    selections += [s.get('perk') for s in sub.get('selections', [])]
    selections = (selections + [None] * 6)[:6]

    return MatchParticipant(
        match_id=match_id,
        puuid=p.get('puuid', ''),
        riot_id_game_name=p.get('riotIdGameName'),
        champion_id=p.get('championId', 0),
        champion_name=p.get('championName', ''),
        champ_level=p.get('champLevel', 0),
        team_id=p.get('teamId', 0),
        team_position=p.get('teamPosition', ''),
        # Game outcome
        win=bool(p.get('win', False)),
        kills=p.get('kills', 0),
        deaths=p.get('deaths', 0),
        assists=p.get('assists', 0),
        # Economy & damage
        gold_earned=p.get('goldEarned', 0),
        total_damage_dealt=p.get('totalDamageDealt', 0),
        total_damage_dealt_to_champions=p.get('totalDamageDealtToChampions', 0),
        total_damage_taken=p.get('totalDamageTaken', 0),
        cs=p.get('totalMinionsKilled', 0) + p.get('neutralMinionsKilled', 0),
        vision_score=p.get('visionScore', 0),
        # Multikills
        double_kills=p.get('doubleKills', 0),
        triple_kills=p.get('tripleKills', 0),
        quadra_kills=p.get('quadraKills', 0),
        penta_kills=p.get('pentaKills', 0),
        first_blood=bool(p.get('firstBloodKill', False)),
        # Loadout
        summoner1_id=p.get('summoner1Id'),
        summoner2_id=p.get('summoner2Id'),
        item0=p.get('item0'),
        item1=p.get('item1'),
        item2=p.get('item2'),
        item3=p.get('item3'),
        item4=p.get('item4'),
        item5=p.get('item5'),
        item6=p.get('item6'),
        perk_primary_style=primary.get('style'),
        perk_sub_style=sub.get('style'),
        perk0=selections[0],
        perk1=selections[1],
        perk2=selections[2],
        perk3=selections[3],
        perk4=selections[4],
        perk5=selections[5],
    )
