"""SQLite repositories for users and players."""
import sqlite3
from typing import List, Optional

from domain.entities import Player, User
from domain.interfaces import IPlayerRepository, IUserRepository
from .database import SQLiteDatabase, from_db_time, to_db_time


def _row_to_user(row: sqlite3.Row) -> User:
    return User(
        user_id=row["user_id"],
        email=row["email"],
        riot_id=row["riot_id"],
        riot_puuid=row["riot_puuid"],
        region=row["region"],
        created_at=from_db_time(row["created_at"]),
        last_sync=from_db_time(row["last_sync"]),
        is_active=bool(row["is_active"]),
    )


class UserRepository(IUserRepository):

    def __init__(self, db: SQLiteDatabase):
        self._db = db

    def add(self, user: User) -> User:
        with self._db.transaction() as conn:
            conn.execute(
                """INSERT INTO users(user_id,email,riot_id,riot_puuid,region,created_at,last_sync,is_active)
                   VALUES(?,?,?,?,?,?,?,?)""",
                (
                    user.user_id, user.email, user.riot_id, user.riot_puuid, user.region,
                    to_db_time(user.created_at), to_db_time(user.last_sync), 1 if user.is_active else 0,
                ),
            )
        return user

    def get_by_id(self, user_id: str) -> Optional[User]:
        row = self._db.fetch_one("SELECT * FROM users WHERE user_id = ?", (user_id,))
        return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        row = self._db.fetch_one("SELECT * FROM users WHERE lower(email) = lower(?)", (email,))
        return _row_to_user(row) if row else None

    def get_by_riot_puuid(self, puuid: str) -> Optional[User]:
        row = self._db.fetch_one("SELECT * FROM users WHERE riot_puuid = ?", (puuid,))
        return _row_to_user(row) if row else None

    def list_active_linked(self) -> List[User]:
        rows = self._db.fetch_all(
            """SELECT * FROM users
               WHERE is_active = 1 AND riot_puuid IS NOT NULL AND riot_puuid != ''
               ORDER BY created_at, user_id"""
        )
        return [_row_to_user(r) for r in rows]

    def update(self, user: User) -> None:
        with self._db.transaction() as conn:
            conn.execute(
                """UPDATE users SET email=?, riot_id=?, riot_puuid=?, region=?,
                   last_sync=?, is_active=? WHERE user_id=?""",
                (
                    user.email, user.riot_id, user.riot_puuid, user.region,
                    to_db_time(user.last_sync), 1 if user.is_active else 0, user.user_id,
                ),
            )


class PlayerRepository(IPlayerRepository):

    def __init__(self, db: SQLiteDatabase):
        self._db = db

    def get(self, puuid: str) -> Optional[Player]:
        row = self._db.fetch_one("SELECT * FROM players WHERE puuid = ?", (puuid,))
        if row is None:
            return None
        return Player(
            puuid=row["puuid"],
            region=row["region"],
            summoner_id=row["summoner_id"],
            summoner_name=row["summoner_name"],
            profile_icon_id=row["profile_icon_id"],
            summoner_level=row["summoner_level"],
            updated_at=from_db_time(row["updated_at"]),
        )

    def upsert(self, player: Player) -> None:
        # COALESCE keeps cached summoner fields when a refresh came back without them.
        with self._db.transaction() as conn:
            conn.execute(
                """INSERT INTO players(puuid,summoner_id,summoner_name,profile_icon_id,summoner_level,region,updated_at)
                   VALUES(?,?,?,?,?,?,?)
                   ON CONFLICT(puuid) DO UPDATE SET
                   summoner_id=COALESCE(excluded.summoner_id, players.summoner_id),
                   summoner_name=COALESCE(excluded.summoner_name, players.summoner_name),
                   profile_icon_id=COALESCE(excluded.profile_icon_id, players.profile_icon_id),
                   summoner_level=COALESCE(excluded.summoner_level, players.summoner_level),
                   region=excluded.region,
                   updated_at=excluded.updated_at""",
                (
                    player.puuid, player.summoner_id, player.summoner_name, player.profile_icon_id,
                    player.summoner_level, player.region, to_db_time(player.updated_at),
                ),
            )
