"""Participant entity: one player's line in a stored match."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class MatchParticipant:
    """Performance of one player in one match. Unique per (match_id, puuid)."""

    # Identity
    match_id: str
    puuid: str
    riot_id_game_name: Optional[str] = None

    # Champion & side
    champion_id: int = 0
    champion_name: str = ""
    champ_level: int = 0
    team_id: int = 0                     # 100 = blue, 200 = red
    team_position: str = ""

    # Outcome
    win: bool = False
    kills: int = 0
    deaths: int = 0
    assists: int = 0

    # Economy & damage
    gold_earned: int = 0
    total_damage_dealt: int = 0
    total_damage_dealt_to_champions: int = 0
    total_damage_taken: int = 0
    cs: int = 0                          # lane minions + neutral monsters
    vision_score: int = 0

    # Multikills
    double_kills: int = 0
    triple_kills: int = 0
    quadra_kills: int = 0
    penta_kills: int = 0
    first_blood: bool = False

    # Loadout
    summoner1_id: Optional[int] = None
    summoner2_id: Optional[int] = None
    item0: Optional[int] = None
    item1: Optional[int] = None
    item2: Optional[int] = None
    item3: Optional[int] = None
    item4: Optional[int] = None
    item5: Optional[int] = None
    item6: Optional[int] = None          # Trinket
    perk_primary_style: Optional[int] = None
    perk_sub_style: Optional[int] = None
    perk0: Optional[int] = None
    perk1: Optional[int] = None
    perk2: Optional[int] = None
    perk3: Optional[int] = None
    perk4: Optional[int] = None
    perk5: Optional[int] = None

    @property
    def kda(self) -> float:
        """Calculate KDA ratio."""
        if self.deaths == 0:
            return float(self.kills + self.assists)
        return (self.kills + self.assists) / self.deaths

    @property
    def items(self) -> list[Optional[int]]:
        """Items in slots 0-5 (trinket excluded)."""
        return [self.item0, self.item1, self.item2, self.item3, self.item4, self.item5]

    @property
    def perks(self) -> list[Optional[int]]:
        return [self.perk0, self.perk1, self.perk2, self.perk3, self.perk4, self.perk5]
