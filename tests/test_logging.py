"""
tests/test_logging.py

Purpose:
    Structured logging: JSON-lines output through the queue listener,
    bound context fields, lazy messages, and custom levels.
"""

import json
import logging

import pytest

from core.logging import bootstrap_logging, context, get_context, get_logger, job_context, shutdown_logging
from domain.entities import SyncJob
from core.logging.levels import LogLevel, to_level


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    shutdown_logging()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_file_carries_context_and_service(tmp_path, restore_root_logging, monkeypatch):
    monkeypatch.setenv("LOG_CONSOLE", "false")
    bootstrap_logging(service="riftsync-test", level="TRACE", log_dir=tmp_path, log_file_name="test.jsonl")
    log = get_logger("tests.logging", service="sync")

    with context(job_id=7, puuid="p1"):
        log.success(lambda: "job done")
    log.trace("outside")
    shutdown_logging()

    lines = [json.loads(line) for line in (tmp_path / "test.jsonl").read_text().splitlines()]
    assert lines[0]["message"] == "job done"
    assert lines[0]["level"] == "SUCCESS"
    assert lines[0]["service"] == "sync"
    assert lines[0]["context"] == {"job_id": 7, "puuid": "p1"}
    assert lines[1]["level"] == "TRACE"
    assert "context" not in lines[1]


def test_lazy_message_not_built_when_disabled():
    calls = []
    logger = logging.getLogger("tests.lazy")
    logger.setLevel(logging.WARNING)
    log = get_logger("tests.lazy")

    log.debug(lambda: calls.append("built") or "expensive")
    assert calls == []


def test_context_restores_previous_values():
    with context(job_id=1):
        with context(puuid="p1"):
            assert get_context() == {"job_id": 1, "puuid": "p1"}
        assert get_context() == {"job_id": 1}
    assert get_context() == {}


def test_to_level():
    assert to_level("success") == int(LogLevel.SUCCESS)
    assert to_level("nonsense", default=logging.ERROR) == logging.ERROR
    assert to_level(None) == logging.INFO


def test_job_context_binds_job_fields():
    job = SyncJob("p9", job_id=3)
    with job_context(job), context(puuid=None):
        assert get_context() == {"job_id": 3, "puuid": "p9", "job_type": "FULL_SYNC"}
    assert get_context() == {}
