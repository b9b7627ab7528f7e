from __future__ import annotations

import argparse

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))
from core.logging.config import bootstrap_logging, shutdown_logging
from config import settings
from domain.errors import SyncError
from presentation.cli import SyncCommand, SyncRuntime


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Queue sync jobs for linked users.")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--user-id", help="queue a sync for one user")
    target.add_argument("--all", action="store_true", help="queue a sync for every active linked user")
    parser.add_argument("--status", action="store_true", help="print the queue status afterwards")
    return parser.parse_args(argv)


def main(argv: list[str]) -> int:
    args = _parse_args(argv)
    bootstrap_logging(service="trigger", level=settings.LOG_LEVEL, log_dir=settings.LOG_DIR, log_file_name="trigger.jsonl")
    settings.create_directories()
    runtime = SyncRuntime()
    try:
        command = SyncCommand(runtime)
        if args.all:
            command.trigger_all()
        else:
            command.trigger_one(args.user_id)
        if args.status:
            command.status()
        return 0
    except SyncError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        runtime.close()
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
