from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict

from .context import get_context

_LEVEL_COLORS = {
    "TRACE": "\033[90m",
    "DEBUG": "\033[37m",
    "INFO": "\033[36m",
    "SUCCESS": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


def _base_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime(record.created)),
        "level": record.levelname,
        "service": getattr(record, "service", None),
        "logger": record.name,
        "function": record.funcName,
        "line_number": record.lineno,
    }


class ConsoleFormatter(logging.Formatter):
    """One coloured line per record: time | level | service | where | message | context."""

    def format(self, record: logging.LogRecord) -> str:
        fields = _base_fields(record)
        parts = [
            fields["timestamp"],
            f"{fields['level']:<8}",
            fields["service"] or "-",
            f"{record.module}:{fields['function']}:{fields['line_number']}",
            record.getMessage(),
        ]
        ctx = getattr(record, "log_context", None) or get_context()
        if ctx:
            parts.append(" ".join(f"{k}={v}" for k, v in sorted(ctx.items())))
        line = " | ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        color = _LEVEL_COLORS.get(record.levelname, "")
        return f"{color}{line}{_RESET}" if color else line


class JSONFormatter(logging.Formatter):
    """JSON-lines records for the rotating log file."""

    def format(self, record: logging.LogRecord) -> str:
        payload = _base_fields(record)
        payload["message"] = record.getMessage()
        ctx = getattr(record, "log_context", None) or get_context()
        if ctx:
            payload["context"] = ctx
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))
