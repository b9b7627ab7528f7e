"""SQLite repository for ranked standings."""
from typing import List

from domain.entities import RankedStat
from domain.enums import QueueType
from domain.interfaces import IRankedStatRepository
from .database import SQLiteDatabase, from_db_time, to_db_time


class RankedStatRepository(IRankedStatRepository):
    """One row per (puuid, queue_type); the primary key makes upserts idempotent."""

    def __init__(self, db: SQLiteDatabase):
        self._db = db

    def upsert(self, stat: RankedStat) -> None:
        with self._db.transaction() as conn:
            conn.execute(
                """INSERT INTO player_ranked_stats(puuid,queue_type,tier,rank,league_points,wins,losses,updated_at)
                   VALUES(?,?,?,?,?,?,?,?)
                   ON CONFLICT(puuid,queue_type) DO UPDATE SET
                   tier=excluded.tier,rank=excluded.rank,league_points=excluded.league_points,
                   wins=excluded.wins,losses=excluded.losses,updated_at=excluded.updated_at""",
                (
                    stat.puuid, stat.queue_type.value, stat.tier, stat.rank, stat.league_points,
                    stat.wins, stat.losses, to_db_time(stat.updated_at),
                ),
            )

    def list_for_player(self, puuid: str) -> List[RankedStat]:
        rows = self._db.fetch_all(
            "SELECT * FROM player_ranked_stats WHERE puuid = ? ORDER BY queue_type DESC", (puuid,)
        )
        stats = []
        for r in rows:
            queue_type = QueueType.from_api(r["queue_type"])
            if queue_type is None:
                continue
            stats.append(RankedStat(
                puuid=r["puuid"],
                queue_type=queue_type,
                tier=r["tier"],
                rank=r["rank"],
                league_points=r["league_points"],
                wins=r["wins"],
                losses=r["losses"],
                updated_at=from_db_time(r["updated_at"]),
            ))
        return stats
