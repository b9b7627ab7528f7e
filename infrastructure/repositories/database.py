"""SQLite connection and schema for the sync store."""
import logging
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator, List, Optional, Sequence, Union

from domain.errors import PersistenceFailure

logger = logging.getLogger(__name__)

MEMORY = ":memory:"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    user_id     TEXT PRIMARY KEY,
    email       TEXT NOT NULL UNIQUE,
    riot_id     TEXT,
    riot_puuid  TEXT UNIQUE,
    region      TEXT,
    created_at  TEXT NOT NULL,
    last_sync   TEXT,
    is_active   INTEGER NOT NULL DEFAULT 1
);

CREATE TABLE IF NOT EXISTS players (
    puuid            TEXT PRIMARY KEY,
    summoner_id      TEXT,
    summoner_name    TEXT,
    profile_icon_id  INTEGER,
    summoner_level   INTEGER,
    region           TEXT NOT NULL,
    updated_at       TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS player_ranked_stats (
    puuid          TEXT NOT NULL,
    queue_type     TEXT NOT NULL,
    tier           TEXT,
    rank           TEXT,
    league_points  INTEGER,
    wins           INTEGER NOT NULL DEFAULT 0,
    losses         INTEGER NOT NULL DEFAULT 0,
    updated_at     TEXT NOT NULL,
    PRIMARY KEY (puuid, queue_type)
);

CREATE TABLE IF NOT EXISTS matches (
    match_id       TEXT PRIMARY KEY,
    game_creation  INTEGER NOT NULL,
    game_duration  INTEGER NOT NULL,
    game_mode      TEXT NOT NULL,
    game_type      TEXT NOT NULL,
    queue_id       INTEGER NOT NULL,
    platform_id    TEXT NOT NULL,
    game_version   TEXT NOT NULL,
    fetched_at     TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS match_participants (
    match_id                         TEXT NOT NULL REFERENCES matches(match_id) ON DELETE CASCADE,
    puuid                            TEXT NOT NULL,
    riot_id_game_name                TEXT,
    champion_id                      INTEGER NOT NULL,
    champion_name                    TEXT NOT NULL,
    champ_level                      INTEGER NOT NULL,
    team_id                          INTEGER NOT NULL,
    team_position                    TEXT NOT NULL,
    win                              INTEGER NOT NULL,
    kills                            INTEGER NOT NULL,
    deaths                           INTEGER NOT NULL,
    assists                          INTEGER NOT NULL,
    gold_earned                      INTEGER NOT NULL,
    total_damage_dealt               INTEGER NOT NULL,
    total_damage_dealt_to_champions  INTEGER NOT NULL,
    total_damage_taken               INTEGER NOT NULL,
    cs                               INTEGER NOT NULL,
    vision_score                     INTEGER NOT NULL,
    double_kills                     INTEGER NOT NULL,
    triple_kills                     INTEGER NOT NULL,
    quadra_kills                     INTEGER NOT NULL,
    penta_kills                      INTEGER NOT NULL,
    first_blood                      INTEGER NOT NULL,
    summoner1_id                     INTEGER,
    summoner2_id                     INTEGER,
    item0 INTEGER, item1 INTEGER, item2 INTEGER, item3 INTEGER,
    item4 INTEGER, item5 INTEGER, item6 INTEGER,
    perk_primary_style               INTEGER,
    perk_sub_style                   INTEGER,
    perk0 INTEGER, perk1 INTEGER, perk2 INTEGER,
    perk3 INTEGER, perk4 INTEGER, perk5 INTEGER,
    PRIMARY KEY (match_id, puuid)
);

CREATE TABLE IF NOT EXISTS sync_jobs (
    job_id             INTEGER PRIMARY KEY AUTOINCREMENT,
    puuid              TEXT NOT NULL,
    job_type           TEXT NOT NULL,
    status             TEXT NOT NULL,
    matches_processed  INTEGER NOT NULL DEFAULT 0,
    created_at         TEXT NOT NULL,
    started_at         TEXT,
    completed_at       TEXT,
    error_message      TEXT
);

CREATE INDEX IF NOT EXISTS idx_participants_puuid ON match_participants(puuid);
CREATE INDEX IF NOT EXISTS idx_sync_jobs_status_created ON sync_jobs(status, created_at, job_id);
CREATE INDEX IF NOT EXISTS idx_sync_jobs_puuid ON sync_jobs(puuid);

-- At most one PENDING/PROCESSING job per PUUID, whatever the enqueue path.
CREATE UNIQUE INDEX IF NOT EXISTS uq_sync_jobs_active_puuid
    ON sync_jobs(puuid) WHERE status IN ('PENDING', 'PROCESSING');
"""


def to_db_time(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def from_db_time(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


class SQLiteDatabase:
    """Owns the SQLite connection and the schema.

    The connection runs in autocommit mode; multi-statement writes go
    through ``transaction()``, which takes the write lock up front
    (BEGIN IMMEDIATE) so a select-then-update cannot interleave with
    another writer.
    """

    def __init__(self, db_path: Union[Path, str] = MEMORY):
        self.db_path = db_path
        if str(db_path) != MEMORY:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.RLock()
        self._conn = sqlite3.connect(str(db_path), isolation_level=None, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys=ON")
        if str(db_path) != MEMORY:
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA synchronous=NORMAL")
            self._conn.execute("PRAGMA busy_timeout=5000")
        self._create_tables()
        logger.debug(f"SQLite store ready at {db_path}")

    def _create_tables(self) -> None:
        try:
            self._conn.executescript(_SCHEMA)
        except sqlite3.Error as exc:
            raise PersistenceFailure(f"schema creation failed: {exc}") from exc

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        with self._lock:
            try:
                self._conn.execute("BEGIN IMMEDIATE")
            except sqlite3.Error as exc:
                raise PersistenceFailure(f"could not start transaction: {exc}") from exc
            try:
                yield self._conn
            except sqlite3.Error as exc:
                self._rollback()
                raise PersistenceFailure(str(exc)) from exc
            except BaseException:
                self._rollback()
                raise
            else:
                try:
                    self._conn.execute("COMMIT")
                except sqlite3.Error as exc:
                    self._rollback()
                    raise PersistenceFailure(f"commit failed: {exc}") from exc

    def _rollback(self) -> None:
        if self._conn.in_transaction:
            self._conn.execute("ROLLBACK")

    def execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        """Run a single autocommitted statement."""
        with self._lock:
            try:
                return self._conn.execute(sql, params)
            except sqlite3.Error as exc:
                raise PersistenceFailure(str(exc)) from exc

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        return self.execute(sql, params).fetchone()

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
        return self.execute(sql, params).fetchall()

    def table_counts(self) -> dict:
        rows = self.fetch_all(
            "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
        )
        return {r["name"]: self.fetch_one(f'SELECT COUNT(*) AS n FROM "{r["name"]}"')["n"] for r in rows}

    def integrity_check(self) -> str:
        row = self.fetch_one("PRAGMA integrity_check")
        return row[0] if row else "unknown"

    def close(self) -> None:
        with self._lock:
            self._conn.close()
