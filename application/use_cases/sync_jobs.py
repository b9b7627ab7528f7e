"""Caller-facing sync entry points.

These are the only operations the rest of the application uses to
create sync jobs or read their state; results are plain dicts.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from application.services import DataSyncService
from domain.entities import SyncJob


def _job_view(job: Optional[SyncJob]) -> Optional[Dict[str, Any]]:
    if job is None:
        return None
    view = job.to_dict()
    view['duration_seconds'] = job.duration.total_seconds() if job.duration else None
    return view


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


class SyncJobsUseCase:

    def __init__(self, service: DataSyncService):
        self.service = service

    def trigger_sync_for_subject(self, user_id: str) -> Dict[str, Any]:
        return _job_view(self.service.enqueue_job_for_subject(user_id))

    def trigger_sync_for_all_subjects(self) -> Dict[str, Any]:
        result = self.service.enqueue_jobs_for_all_eligible_subjects()
        return {
            'jobs_created': result.created,
            'message': result.message,
            'jobs': [_job_view(j) for j in result.jobs],
        }

    def get_sync_status(self) -> Dict[str, Any]:
        snapshot = self.service.get_status_snapshot()
        return {
            'pending_jobs': snapshot.pending,
            'processing_jobs': snapshot.processing,
            'completed_jobs': snapshot.completed,
            'failed_jobs': snapshot.failed,
            'last_completed_at': _iso(snapshot.last_completed_at),
        }

    def get_sync_history(self, user_id: str) -> Dict[str, Any]:
        history = self.service.get_sync_history(user_id)
        return {
            'user_id': history.user_id,
            'last_sync': _iso(history.last_sync),
            'total_syncs': history.total_syncs,
            'successful_syncs': history.successful_syncs,
            'failed_syncs': history.failed_syncs,
            'latest_job': _job_view(history.latest_job),
        }
