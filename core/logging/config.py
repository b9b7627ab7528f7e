from __future__ import annotations

import logging
import os
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import Optional

from .context import get_context
from .formatter import ConsoleFormatter, JSONFormatter
from .levels import register_levels, to_level

_listener: QueueListener | None = None


class _RecordEnricher(logging.Filter):
    """Stamps service name and bound context onto the record in the emitting task.

    Records cross to the listener thread through a queue, where the
    contextvars of the emitting task are no longer visible.
    """

    def __init__(self, service: str) -> None:
        super().__init__()
        self._service = service

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "service", None) is None:
            record.service = self._service
        if not hasattr(record, "log_context"):
            record.log_context = get_context()
        return True


def bootstrap_logging(
    *,
    service: str = "riftsync",
    level: str | int | None = None,
    log_dir: Optional[Path] = None,
    log_file_name: str = "riftsync.jsonl",
    max_bytes: int = 5_000_000,
    backup_count: int = 5,
) -> None:
    global _listener
    shutdown_logging()
    register_levels()

    root = logging.getLogger()
    root.handlers.clear()
    lvl = to_level(level or os.getenv("LOG_LEVEL", "INFO"))
    root.setLevel(lvl)
    enricher = _RecordEnricher(service)

    enable_console = os.getenv("LOG_CONSOLE", "false").strip().lower() == "true"
    if enable_console or log_dir is None:
        console = logging.StreamHandler()
        console.setLevel(to_level(os.getenv("LOG_CONSOLE_LEVEL"), default=lvl))
        console.setFormatter(ConsoleFormatter())
        console.addFilter(enricher)
        root.addHandler(console)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        json_handler = RotatingFileHandler(
            str(log_dir / log_file_name), maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        json_handler.setLevel(lvl)
        json_handler.setFormatter(JSONFormatter())
        q: Queue[logging.LogRecord] = Queue(-1)
        qh = QueueHandler(q)
        qh.addFilter(enricher)
        root.addHandler(qh)
        _listener = QueueListener(q, json_handler, respect_handler_level=True)
        _listener.start()

    # httpx logs every request at INFO; keep it to warnings.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def shutdown_logging() -> None:
    global _listener
    if _listener is not None:
        _listener.stop()
        _listener = None
