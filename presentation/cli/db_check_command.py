from __future__ import annotations

from core.logging.logger import get_logger
from domain.errors import PersistenceFailure
from .runtime import SyncRuntime


class DBCheckCommand:
    """Database health/inspection command."""

    def __init__(self, runtime: SyncRuntime) -> None:
        self.runtime = runtime
        self.log = get_logger(__name__, service="db-cli")

    def run(self) -> None:
        while True:
            print("\n=== DB Check ===", flush=True)
            print(f"Database: {self.runtime.db.db_path}", flush=True)
            print("1) Count rows per table", flush=True)
            print("2) Pending jobs (oldest first)", flush=True)
            print("3) PRAGMA integrity_check", flush=True)
            print("4) Back", flush=True)
            choice = input("Choose: ").strip()
            if choice == "1":
                self._count_rows()
                input("Press Enter to return to DB menu...")
            elif choice == "2":
                self._pending_jobs()
                input("Press Enter to return to DB menu...")
            elif choice == "3":
                self._integrity()
                input("Press Enter to return to DB menu...")
            elif choice == "4":
                return
            else:
                print("Invalid option.", flush=True)

    def _count_rows(self) -> None:
        try:
            counts = self.runtime.db.table_counts()
        except PersistenceFailure as e:
            self.log.error(lambda: f"db-count-failed {e}")
            print(f"Error: {e}", flush=True)
            return
        print("\nRow counts:", flush=True)
        for table, count in counts.items():
            print(f"- {table}: {count}", flush=True)

    def _pending_jobs(self) -> None:
        jobs = self.runtime.jobs.list_pending_oldest_first(limit=20)
        if not jobs:
            print("No pending jobs.", flush=True)
            return
        for job in jobs:
            print(f"- job {job.job_id}: {job.puuid} queued {job.created_at.isoformat()}", flush=True)

    def _integrity(self) -> None:
        try:
            print(f"integrity_check: {self.runtime.db.integrity_check()}", flush=True)
        except PersistenceFailure as e:
            self.log.error(lambda: f"db-integrity-failed {e}")
            print(f"Error: {e}", flush=True)
