"""Match repository implementation."""
import logging
import sqlite3
from dataclasses import fields
from typing import List, Optional

from domain.entities import Match, MatchParticipant
from domain.interfaces import IMatchRepository
from .database import SQLiteDatabase, from_db_time, to_db_time

logger = logging.getLogger(__name__)

_PARTICIPANT_COLUMNS = [f.name for f in fields(MatchParticipant)]
_BOOL_COLUMNS = {"win", "first_blood"}

_INSERT_PARTICIPANT = (
    f"INSERT INTO match_participants({','.join(_PARTICIPANT_COLUMNS)}) "
    f"VALUES({','.join('?' for _ in _PARTICIPANT_COLUMNS)}) "
    "ON CONFLICT(match_id, puuid) DO NOTHING"
)


def _participant_params(participant: MatchParticipant) -> tuple:
    values = []
    for column in _PARTICIPANT_COLUMNS:
        value = getattr(participant, column)
        values.append(int(value) if column in _BOOL_COLUMNS else value)
    return tuple(values)


def _row_to_participant(row: sqlite3.Row) -> MatchParticipant:
    data = {column: row[column] for column in _PARTICIPANT_COLUMNS}
    for column in _BOOL_COLUMNS:
        data[column] = bool(data[column])
    return MatchParticipant(**data)


class MatchRepository(IMatchRepository):
    """Repository for stored matches.

    Matches are write-once: a match row is inserted together with its
    participants, and an existing match ID is never overwritten.
    """

    def __init__(self, db: SQLiteDatabase):
        self._db = db

    def exists(self, match_id: str) -> bool:
        row = self._db.fetch_one("SELECT 1 FROM matches WHERE match_id = ?", (match_id,))
        return row is not None

    def insert_match(self, match: Match) -> None:
        """
        Insert a match and its participants in one transaction.

        Args:
            match: Match with ``participants`` attached
        """
        with self._db.transaction() as conn:
            conn.execute(
                """INSERT INTO matches(match_id,game_creation,game_duration,game_mode,game_type,
                   queue_id,platform_id,game_version,fetched_at)
                   VALUES(?,?,?,?,?,?,?,?,?)""",
                (
                    match.match_id, match.game_creation, match.game_duration, match.game_mode,
                    match.game_type, match.queue_id, match.platform_id, match.game_version,
                    to_db_time(match.fetched_at),
                ),
            )
            conn.executemany(_INSERT_PARTICIPANT, [_participant_params(p) for p in match.participants])
        logger.debug(f"Stored match {match.match_id} with {len(match.participants)} participants")

    def insert_participant(self, participant: MatchParticipant) -> None:
        with self._db.transaction() as conn:
            conn.execute(_INSERT_PARTICIPANT, _participant_params(participant))

    def get(self, match_id: str) -> Optional[Match]:
        row = self._db.fetch_one("SELECT * FROM matches WHERE match_id = ?", (match_id,))
        if row is None:
            return None
        return Match(
            match_id=row["match_id"],
            game_creation=row["game_creation"],
            game_duration=row["game_duration"],
            game_mode=row["game_mode"],
            game_type=row["game_type"],
            queue_id=row["queue_id"],
            platform_id=row["platform_id"],
            game_version=row["game_version"],
            fetched_at=from_db_time(row["fetched_at"]),
            participants=self.list_participants(match_id),
        )

    def list_participants(self, match_id: str) -> List[MatchParticipant]:
        rows = self._db.fetch_all(
            "SELECT * FROM match_participants WHERE match_id = ? ORDER BY team_id, rowid", (match_id,)
        )
        return [_row_to_participant(r) for r in rows]

    def count(self) -> int:
        return self._db.fetch_one("SELECT COUNT(*) AS n FROM matches")["n"]

    def count_participants(self, match_id: Optional[str] = None) -> int:
        if match_id is None:
            return self._db.fetch_one("SELECT COUNT(*) AS n FROM match_participants")["n"]
        row = self._db.fetch_one(
            "SELECT COUNT(*) AS n FROM match_participants WHERE match_id = ?", (match_id,)
        )
        return row["n"]
