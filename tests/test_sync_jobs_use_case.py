"""
tests/test_sync_jobs_use_case.py

Purpose:
    Caller-facing sync entry points return plain dict views, and the
    SyncJob entity only moves forward through its lifecycle.
"""

from datetime import timedelta

import pytest

from application.services import DataSyncService
from application.use_cases import SyncJobsUseCase
from domain.entities import SyncJob, User
from domain.enums import JobStatus
from domain.errors import InvalidJobTransition, NotLinked


@pytest.fixture
def use_case(repos, source, clock):
    service = DataSyncService(
        repos.users, repos.players, repos.ranked, repos.matches, repos.jobs, source, clock=clock,
    )
    return SyncJobsUseCase(service)


def test_trigger_for_subject_returns_job_view(use_case, linked_user):
    view = use_case.trigger_sync_for_subject(linked_user.user_id)
    assert view["status"] == "PENDING"
    assert view["job_type"] == "FULL_SYNC"
    assert view["puuid"] == linked_user.riot_puuid
    assert view["duration_seconds"] is None


def test_trigger_all_and_status(use_case, linked_user):
    result = use_case.trigger_sync_for_all_subjects()
    assert result["jobs_created"] == 1
    assert result["jobs"][0]["puuid"] == linked_user.riot_puuid

    assert use_case.trigger_sync_for_all_subjects()["jobs_created"] == 0

    status = use_case.get_sync_status()
    assert status == {
        "pending_jobs": 1,
        "processing_jobs": 0,
        "completed_jobs": 0,
        "failed_jobs": 0,
        "last_completed_at": None,
    }


@pytest.mark.asyncio
async def test_history_after_completed_sync(use_case, linked_user):
    use_case.trigger_sync_for_subject(linked_user.user_id)
    service = use_case.service
    await service.process_job(service.claim_next_pending_job())

    history = use_case.get_sync_history(linked_user.user_id)
    assert history["total_syncs"] == 1
    assert history["successful_syncs"] == 1
    assert history["latest_job"]["status"] == "COMPLETED"
    assert history["latest_job"]["duration_seconds"] > 0
    assert history["last_sync"] == history["latest_job"]["completed_at"]


def test_history_requires_linked_user(use_case, repos):
    user = repos.users.add(User(email="x@x.io"))
    with pytest.raises(NotLinked):
        use_case.get_sync_history(user.user_id)


def test_sync_job_lifecycle_only_moves_forward(clock):
    job = SyncJob("p1", created_at=clock())
    with pytest.raises(InvalidJobTransition):
        job.complete(clock(), 0)

    started = clock()
    job.claim(started)
    with pytest.raises(InvalidJobTransition):
        job.claim(clock())

    job.fail(started + timedelta(seconds=5), "")
    assert job.status is JobStatus.FAILED
    assert job.error_message == "Unknown error"
    assert job.duration == timedelta(seconds=5)
    with pytest.raises(InvalidJobTransition):
        job.complete(clock(), 1)
