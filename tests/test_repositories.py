"""
tests/test_repositories.py

Purpose:
    SQLite repository behavior: ranked upserts, write-once matches, and the
    sync job queue's duplicate guard, claim and terminal-write semantics.
"""

from datetime import timedelta

import pytest

from domain.entities import Player, RankedStat, SyncJob, User
from domain.enums import JobStatus, QueueType
from domain.errors import InvalidJobTransition, PersistenceFailure


def test_ranked_upsert_keeps_one_row_per_queue(repos, clock):
    repos.ranked.upsert(RankedStat("p1", QueueType.SOLO, "GOLD", "II", 45, 10, 8, clock()))
    repos.ranked.upsert(RankedStat("p1", QueueType.SOLO, "GOLD", "I", 12, 14, 9, clock()))
    repos.ranked.upsert(RankedStat("p1", QueueType.FLEX, "SILVER", "IV", 0, 1, 1, clock()))

    stats = {s.queue_type: s for s in repos.ranked.list_for_player("p1")}
    assert len(stats) == 2
    solo = stats[QueueType.SOLO]
    assert (solo.rank, solo.league_points, solo.wins, solo.losses) == ("I", 12, 14, 9)
    assert repos.ranked.list_for_player("someone-else") == []


def test_user_roundtrip_and_active_linked_listing(repos, clock):
    linked = repos.users.add(User(email="a@x.io", riot_puuid="pa", riot_id="A#1", region="euw1", created_at=clock()))
    repos.users.add(User(email="b@x.io", created_at=clock()))
    repos.users.add(User(email="c@x.io", riot_puuid="pc", is_active=False, created_at=clock()))

    assert [u.user_id for u in repos.users.list_active_linked()] == [linked.user_id]
    assert repos.users.get_by_riot_puuid("pa").email == "a@x.io"
    assert repos.users.get_by_email("A@X.IO").user_id == linked.user_id

    linked.last_sync = clock()
    repos.users.update(linked)
    assert repos.users.get_by_id(linked.user_id).last_sync == linked.last_sync


def test_player_upsert_keeps_known_fields(repos, clock):
    repos.players.upsert(Player("p1", "euw1", summoner_id="s1", summoner_level=30, updated_at=clock()))
    repos.players.upsert(Player("p1", "euw1", summoner_level=31, updated_at=clock()))

    player = repos.players.get("p1")
    assert player.summoner_id == "s1"
    assert player.summoner_level == 31


def test_match_insert_stores_participants_and_is_write_once(repos, match_factory):
    match = match_factory("EUW1_1")
    repos.matches.insert_match(match)

    assert repos.matches.exists("EUW1_1")
    assert not repos.matches.exists("EUW1_2")
    stored = repos.matches.get("EUW1_1")
    assert stored.patch_version == "14.3"
    assert len(stored.participants) == 10
    assert stored.participants[0].win is True

    with pytest.raises(PersistenceFailure):
        repos.matches.insert_match(match_factory("EUW1_1"))
    assert repos.matches.count() == 1
    assert repos.matches.count_participants("EUW1_1") == 10


def test_match_insert_rolls_back_when_participants_fail(repos, match_factory):
    match = match_factory("EUW1_9")
    match.participants[3].champion_name = None  # violates NOT NULL

    with pytest.raises(PersistenceFailure):
        repos.matches.insert_match(match)

    assert not repos.matches.exists("EUW1_9")
    assert repos.matches.count_participants() == 0


def test_duplicate_participant_is_ignored(repos, match_factory):
    match = match_factory("EUW1_3", participants=2)
    repos.matches.insert_match(match)
    repos.matches.insert_participant(match.participants[0])
    assert repos.matches.count_participants("EUW1_3") == 2


def test_create_if_idle_suppresses_second_active_job(repos, clock):
    first, created = repos.jobs.create_if_idle(SyncJob("p1", created_at=clock()))
    again, created_again = repos.jobs.create_if_idle(SyncJob("p1", created_at=clock()))

    assert created is True
    assert created_again is False
    assert again.job_id == first.job_id
    assert repos.jobs.count_by_status()[JobStatus.PENDING] == 1


def test_active_job_unique_index_holds_for_raw_inserts(db, repos, clock):
    repos.jobs.create_if_idle(SyncJob("p1", created_at=clock()))
    with pytest.raises(PersistenceFailure):
        with db.transaction() as conn:
            conn.execute(
                "INSERT INTO sync_jobs(puuid,job_type,status,created_at) VALUES('p1','FULL_SYNC','PENDING','x')"
            )


def test_claim_returns_oldest_pending_once(repos, clock):
    older, _ = repos.jobs.create_if_idle(SyncJob("p1", created_at=clock()))
    newer, _ = repos.jobs.create_if_idle(SyncJob("p2", created_at=clock()))

    first = repos.jobs.claim_next_pending(clock())
    second = repos.jobs.claim_next_pending(clock())
    third = repos.jobs.claim_next_pending(clock())

    assert first.job_id == older.job_id
    assert first.status is JobStatus.PROCESSING
    assert first.started_at is not None
    assert repos.jobs.get(first.job_id).started_at == first.started_at
    assert second.job_id == newer.job_id
    assert third is None


def test_claim_with_single_job_twice(repos, clock):
    job, _ = repos.jobs.create_if_idle(SyncJob("p1", created_at=clock()))
    assert repos.jobs.claim_next_pending(clock()).job_id == job.job_id
    assert repos.jobs.claim_next_pending(clock()) is None


def test_save_result_only_from_processing(repos, clock):
    job, _ = repos.jobs.create_if_idle(SyncJob("p1", created_at=clock()))
    claimed = repos.jobs.claim_next_pending(clock())
    claimed.complete(clock(), 3)

    assert repos.jobs.save_result(claimed) is True
    # A second terminal write finds the row already COMPLETED
    assert repos.jobs.save_result(claimed) is False

    stored = repos.jobs.get(job.job_id)
    assert stored.status is JobStatus.COMPLETED
    assert stored.matches_processed == 3
    assert repos.jobs.last_completed_at() == claimed.completed_at


def test_save_result_rejects_non_terminal_job(repos, clock):
    job, _ = repos.jobs.create_if_idle(SyncJob("p1", created_at=clock()))
    with pytest.raises(InvalidJobTransition):
        repos.jobs.save_result(job)


def test_finished_job_frees_the_puuid(repos, clock):
    repos.jobs.create_if_idle(SyncJob("p1", created_at=clock()))
    claimed = repos.jobs.claim_next_pending(clock())
    claimed.fail(clock(), "boom")
    repos.jobs.save_result(claimed)

    _, created = repos.jobs.create_if_idle(SyncJob("p1", created_at=clock()))
    assert created is True
    history = repos.jobs.list_for_puuid("p1")
    assert [j.status for j in history] == [JobStatus.PENDING, JobStatus.FAILED]


def test_list_stale_processing(repos, clock):
    repos.jobs.create_if_idle(SyncJob("p1", created_at=clock()))
    started = clock()
    repos.jobs.claim_next_pending(started)

    assert repos.jobs.list_stale_processing(started) == []
    stale = repos.jobs.list_stale_processing(started + timedelta(minutes=1))
    assert [j.puuid for j in stale] == ["p1"]


def test_list_pending_oldest_first_limit(repos, clock):
    for puuid in ("a", "b", "c"):
        repos.jobs.create_if_idle(SyncJob(puuid, created_at=clock()))
    assert [j.puuid for j in repos.jobs.list_pending_oldest_first(limit=2)] == ["a", "b"]


def test_table_counts_and_integrity(db, repos, match_factory):
    repos.matches.insert_match(match_factory("EUW1_5", participants=4))
    counts = db.table_counts()
    assert counts["matches"] == 1
    assert counts["match_participants"] == 4
    assert db.integrity_check() == "ok"
