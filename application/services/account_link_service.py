"""Link application users to Riot accounts."""
from __future__ import annotations

from typing import Optional, Tuple

from core.logging import get_logger
from domain.clock import Clock, utc_now
from domain.entities import Player, User
from domain.enums import Region
from domain.errors import AccountAlreadyLinked, AccountNotFound, InvalidRiotId, SubjectNotFound
from domain.interfaces import IPlayerRepository, IRiotDataSource, IUserRepository

logger = get_logger(__name__, service="accounts")


def split_riot_id(riot_id: str) -> Tuple[str, str]:
    """'Faker#KR1' -> ('Faker', 'KR1'). Raises InvalidRiotId."""
    game_name, sep, tag_line = (riot_id or "").strip().rpartition("#")
    if not sep or not game_name.strip() or not tag_line.strip():
        raise InvalidRiotId(riot_id)
    return game_name.strip(), tag_line.strip()


class AccountLinkService:
    """Registers users and verifies their Riot ID before a sync can be queued."""

    def __init__(
        self,
        users: IUserRepository,
        players: IPlayerRepository,
        source: IRiotDataSource,
        *,
        default_region: Region = Region.EUW1,
        clock: Clock = utc_now,
    ):
        self.users = users
        self.players = players
        self.source = source
        self.default_region = default_region
        self._clock = clock

    def register_user(self, email: str) -> User:
        """Create a user, or return the existing one with the same email."""
        email = (email or "").strip()
        if "@" not in email:
            raise ValueError(f"'{email}' is not an email address")
        existing = self.users.get_by_email(email)
        if existing is not None:
            return existing
        user = self.users.add(User(email=email, created_at=self._clock()))
        logger.info(lambda: f"Registered user {user.user_id}")
        return user

    async def link_account(self, user_id: str, riot_id: str, region: Optional[str] = None) -> User:
        """
        Resolve *riot_id* on the Riot API and attach it to the user.

        Relinking the same account is allowed; the Player row is refreshed.

        Raises:
            InvalidRiotId, SubjectNotFound, AccountNotFound, AccountAlreadyLinked
        """
        game_name, tag_line = split_riot_id(riot_id)
        resolved_region = Region.from_string(region, default=self.default_region)

        user = self.users.get_by_id(user_id)
        if user is None:
            raise SubjectNotFound(f"User {user_id} not found.")

        account = await self.source.resolve_account(game_name, tag_line, resolved_region)
        if account is None:
            raise AccountNotFound(f"{game_name}#{tag_line}", resolved_region.value)

        owner = self.users.get_by_riot_puuid(account.puuid)
        if owner is not None and owner.user_id != user.user_id:
            raise AccountAlreadyLinked(account.puuid, owner.user_id)

        summoner = await self.source.get_summoner(account.puuid, resolved_region)
        self.players.upsert(Player(
            puuid=account.puuid,
            region=resolved_region.value,
            summoner_id=summoner.summoner_id if summoner else None,
            summoner_name=summoner.summoner_name if summoner else None,
            profile_icon_id=summoner.profile_icon_id if summoner else None,
            summoner_level=summoner.summoner_level if summoner else None,
            updated_at=self._clock(),
        ))

        user.riot_id = account.riot_id
        user.riot_puuid = account.puuid
        user.region = resolved_region.value
        self.users.update(user)
        logger.success(lambda: f"Linked {account.riot_id} ({resolved_region.friendly}) to user {user.user_id}")
        return user
