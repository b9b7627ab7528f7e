"""SQLite-backed sync job queue."""
import logging
import sqlite3
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from domain.entities import SyncJob
from domain.enums import JobStatus, JobType
from domain.errors import InvalidJobTransition
from domain.interfaces import ISyncJobRepository
from .database import SQLiteDatabase, from_db_time, to_db_time

logger = logging.getLogger(__name__)

_ACTIVE = "status IN ('PENDING', 'PROCESSING')"


def _row_to_job(row: sqlite3.Row) -> SyncJob:
    return SyncJob(
        job_id=row["job_id"],
        puuid=row["puuid"],
        job_type=JobType(row["job_type"]),
        status=JobStatus(row["status"]),
        matches_processed=row["matches_processed"],
        created_at=from_db_time(row["created_at"]),
        started_at=from_db_time(row["started_at"]),
        completed_at=from_db_time(row["completed_at"]),
        error_message=row["error_message"],
    )


class SyncJobRepository(ISyncJobRepository):
    """Work queue over the ``sync_jobs`` table.

    Ownership changes only through conditional updates keyed on the
    row's current status, so two pollers sharing the database file can
    never claim or finish the same job twice.
    """

    _MAX_CLAIM_ATTEMPTS = 5

    def __init__(self, db: SQLiteDatabase):
        self._db = db

    def create_if_idle(self, job: SyncJob) -> Tuple[SyncJob, bool]:
        with self._db.transaction() as conn:
            existing = conn.execute(
                f"SELECT * FROM sync_jobs WHERE puuid = ? AND {_ACTIVE} ORDER BY job_id LIMIT 1",
                (job.puuid,),
            ).fetchone()
            if existing is not None:
                return _row_to_job(existing), False
            try:
                cursor = conn.execute(
                    """INSERT INTO sync_jobs(puuid,job_type,status,matches_processed,created_at,
                       started_at,completed_at,error_message)
                       VALUES(?,?,?,?,?,?,?,?)""",
                    (
                        job.puuid, job.job_type.value, job.status.value, job.matches_processed,
                        to_db_time(job.created_at), to_db_time(job.started_at),
                        to_db_time(job.completed_at), job.error_message,
                    ),
                )
            except sqlite3.IntegrityError:
                # Lost the race on uq_sync_jobs_active_puuid
                winner = conn.execute(
                    f"SELECT * FROM sync_jobs WHERE puuid = ? AND {_ACTIVE} ORDER BY job_id LIMIT 1",
                    (job.puuid,),
                ).fetchone()
                if winner is None:
                    raise
                return _row_to_job(winner), False
        job.job_id = cursor.lastrowid
        return job, True

    def get(self, job_id: int) -> Optional[SyncJob]:
        row = self._db.fetch_one("SELECT * FROM sync_jobs WHERE job_id = ?", (job_id,))
        return _row_to_job(row) if row else None

    def list_pending_oldest_first(self, limit: Optional[int] = None) -> List[SyncJob]:
        sql = "SELECT * FROM sync_jobs WHERE status = 'PENDING' ORDER BY created_at, job_id"
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT ?"
            params = (limit,)
        return [_row_to_job(r) for r in self._db.fetch_all(sql, params)]

    def claim_next_pending(self, started_at: datetime) -> Optional[SyncJob]:
        for _ in range(self._MAX_CLAIM_ATTEMPTS):
            row = self._db.fetch_one(
                "SELECT * FROM sync_jobs WHERE status = 'PENDING' ORDER BY created_at, job_id LIMIT 1"
            )
            if row is None:
                return None
            job = _row_to_job(row)
            job.claim(started_at)
            with self._db.transaction() as conn:
                cursor = conn.execute(
                    """UPDATE sync_jobs SET status = ?, started_at = ?
                       WHERE job_id = ? AND status = 'PENDING'""",
                    (job.status.value, to_db_time(job.started_at), job.job_id),
                )
            if cursor.rowcount == 1:
                return job
            logger.debug(f"Job {job.job_id} was claimed elsewhere, retrying")
        return None

    def save_result(self, job: SyncJob) -> bool:
        if not job.is_terminal:
            raise InvalidJobTransition(job.job_id, job.status.value, "COMPLETED|FAILED")
        with self._db.transaction() as conn:
            cursor = conn.execute(
                """UPDATE sync_jobs SET status = ?, matches_processed = ?, completed_at = ?,
                   error_message = ?
                   WHERE job_id = ? AND status = 'PROCESSING'""",
                (
                    job.status.value, job.matches_processed, to_db_time(job.completed_at),
                    job.error_message, job.job_id,
                ),
            )
        return cursor.rowcount == 1

    def count_by_status(self) -> Dict[JobStatus, int]:
        counts = {status: 0 for status in JobStatus}
        for row in self._db.fetch_all("SELECT status, COUNT(*) AS n FROM sync_jobs GROUP BY status"):
            counts[JobStatus(row["status"])] = row["n"]
        return counts

    def last_completed_at(self) -> Optional[datetime]:
        row = self._db.fetch_one(
            "SELECT MAX(completed_at) AS ts FROM sync_jobs WHERE status = 'COMPLETED'"
        )
        return from_db_time(row["ts"]) if row else None

    def list_for_puuid(self, puuid: str) -> List[SyncJob]:
        rows = self._db.fetch_all(
            "SELECT * FROM sync_jobs WHERE puuid = ? ORDER BY created_at DESC, job_id DESC", (puuid,)
        )
        return [_row_to_job(r) for r in rows]

    def list_stale_processing(self, started_before: datetime) -> List[SyncJob]:
        rows = self._db.fetch_all(
            """SELECT * FROM sync_jobs
               WHERE status = 'PROCESSING' AND started_at IS NOT NULL AND started_at < ?
               ORDER BY started_at, job_id""",
            (to_db_time(started_before),),
        )
        return [_row_to_job(r) for r in rows]
