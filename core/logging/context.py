"""Per-task log fields (job_id, puuid, ...) carried through contextvars."""
from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Mapping

_fields: contextvars.ContextVar[Mapping[str, Any]] = contextvars.ContextVar("sync_log_fields", default={})


def _merged(values: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(_fields.get())
    merged.update((k, v) for k, v in values.items() if v is not None)
    return merged


def get_context() -> Dict[str, Any]:
    return dict(_fields.get())


def bind(**values: Any) -> None:
    _fields.set(_merged(values))


def unbind(*keys: str) -> None:
    _fields.set({k: v for k, v in _fields.get().items() if k not in keys})


@contextmanager
def context(**values: Any) -> Iterator[Dict[str, Any]]:
    """Bind fields for the duration of a ``with`` block; None values are skipped."""
    token = _fields.set(_merged(values))
    try:
        yield get_context()
    finally:
        _fields.reset(token)


def job_context(job: Any):
    """Fields carried by every record emitted while *job* (a SyncJob) runs."""
    return context(job_id=job.job_id, puuid=job.puuid, job_type=job.job_type.value)
