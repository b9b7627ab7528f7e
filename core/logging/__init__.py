"""Structured logging: console + JSON-lines file, context binding."""
from .config import bootstrap_logging, shutdown_logging
from .context import bind, context, get_context, job_context, unbind
from .logger import StructuredLogger, get_logger

__all__ = [
    "bootstrap_logging",
    "shutdown_logging",
    "bind",
    "unbind",
    "context",
    "job_context",
    "get_context",
    "StructuredLogger",
    "get_logger",
]
