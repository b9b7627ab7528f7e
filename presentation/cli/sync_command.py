from __future__ import annotations

from typing import Any, Dict

from core.logging.logger import get_logger
from domain.errors import SyncError
from .runtime import SyncRuntime


def print_job(job: Dict[str, Any]) -> None:
    line = f"- job {job['job_id']}: {job['status']} puuid={job['puuid'][:12]}... created={job['created_at']}"
    if job.get('completed_at'):
        line += f" matches={job['matches_processed']}"
    if job.get('error_message'):
        line += f" error={job['error_message']}"
    print(line, flush=True)


class SyncCommand:
    """Queue sync jobs and inspect the queue."""

    def __init__(self, runtime: SyncRuntime) -> None:
        self.runtime = runtime
        self.use_case = runtime.sync_use_case()
        self.log = get_logger(__name__, service="sync-cli")

    def run(self) -> None:
        while True:
            print("\n=== Sync ===", flush=True)
            print("1) Trigger sync for a user", flush=True)
            print("2) Trigger sync for all linked users", flush=True)
            print("3) Queue status", flush=True)
            print("4) User sync history", flush=True)
            print("5) Back", flush=True)
            choice = input("Choose: ").strip()
            try:
                if choice == "1":
                    self.trigger_one(input("User ID: ").strip())
                elif choice == "2":
                    self.trigger_all()
                elif choice == "3":
                    self.status()
                elif choice == "4":
                    self.history(input("User ID: ").strip())
                elif choice == "5":
                    return
                else:
                    print("Invalid option.", flush=True)
            except SyncError as e:
                self.log.warning(lambda: f"sync-command-failed {e}")
                print(f"Error: {e}", flush=True)

    def trigger_one(self, user_id: str) -> None:
        job = self.use_case.trigger_sync_for_subject(user_id)
        print_job(job)

    def trigger_all(self) -> None:
        result = self.use_case.trigger_sync_for_all_subjects()
        print(result['message'], flush=True)
        for job in result['jobs']:
            print_job(job)

    def status(self) -> None:
        snapshot = self.use_case.get_sync_status()
        print(f"pending:    {snapshot['pending_jobs']}", flush=True)
        print(f"processing: {snapshot['processing_jobs']}", flush=True)
        print(f"completed:  {snapshot['completed_jobs']}", flush=True)
        print(f"failed:     {snapshot['failed_jobs']}", flush=True)
        print(f"last completed at: {snapshot['last_completed_at'] or '-'}", flush=True)

    def history(self, user_id: str) -> None:
        history = self.use_case.get_sync_history(user_id)
        print(f"last sync: {history['last_sync'] or 'never'}", flush=True)
        print(
            f"syncs: {history['total_syncs']} total, "
            f"{history['successful_syncs']} ok, {history['failed_syncs']} failed",
            flush=True,
        )
        if history['latest_job']:
            print_job(history['latest_job'])
