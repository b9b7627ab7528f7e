"""Region enumeration for League of Legends servers."""
from __future__ import annotations

from enum import Enum
from typing import Optional


class Region(Enum):
    """League of Legends platform servers.

    Provides:
    - platform_route: platform host for summoner/league APIs (e.g., euw1)
    - regional_route: routing host for account/match APIs (e.g., europe)
    - friendly: short human-friendly label for CLI (e.g., eune)
    """

    # Europe
    EUW1 = "euw1"  # Europe West
    EUN1 = "eun1"  # Europe Nordic & East
    TR1 = "tr1"    # Turkey
    RU = "ru"      # Russia
    ME1 = "me1"    # Middle East

    # Americas
    NA1 = "na1"    # North America
    BR1 = "br1"    # Brazil
    LA1 = "la1"    # Latin America North
    LA2 = "la2"    # Latin America South

    # Asia
    KR = "kr"      # Korea
    JP1 = "jp1"    # Japan

    # SEA & Oceania
    OC1 = "oc1"    # Oceania
    PH2 = "ph2"    # Philippines
    SG2 = "sg2"    # Singapore
    TH2 = "th2"    # Thailand
    TW2 = "tw2"    # Taiwan
    VN2 = "vn2"    # Vietnam

    @property
    def platform_route(self) -> str:
        """Get platform routing value for API calls."""
        return self.value

    @property
    def regional_route(self) -> str:
        """Get regional routing for account and match APIs."""
        return _REGIONAL_ROUTES[self.value]

    @property
    def friendly(self) -> str:
        """Get a human-friendly short label for console output."""
        return _FRIENDLY.get(self.value, self.value.rstrip("0123456789"))

    @classmethod
    def from_string(cls, value: Optional[str], default: Optional["Region"] = None) -> "Region":
        """Resolve a platform code or short alias ("euw", "lan", "oce") to a Region.

        Unknown or empty values resolve to *default* (EUW1 when not given).
        """
        fallback = default or cls.EUW1
        if not value:
            return fallback
        code = value.strip().lower()
        code = _ALIASES.get(code, code)
        try:
            return cls(code)
        except ValueError:
            return fallback


_REGIONAL_ROUTES = {
    "na1": "americas",
    "br1": "americas",
    "la1": "americas",
    "la2": "americas",
    "euw1": "europe",
    "eun1": "europe",
    "tr1": "europe",
    "ru": "europe",
    "me1": "europe",
    "kr": "asia",
    "jp1": "asia",
    "oc1": "sea",
    "ph2": "sea",
    "sg2": "sea",
    "th2": "sea",
    "tw2": "sea",
    "vn2": "sea",
}

_FRIENDLY = {
    "eun1": "eune",
    "euw1": "euw",
    "na1": "na",
    "br1": "br",
    "la1": "lan",
    "la2": "las",
    "jp1": "jp",
    "oc1": "oce",
}

_ALIASES = {label: code for code, label in _FRIENDLY.items()}
_ALIASES.update({"eu": "euw1", "eu west": "euw1", "tr": "tr1", "me": "me1"})
