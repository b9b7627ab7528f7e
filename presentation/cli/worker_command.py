from __future__ import annotations

import asyncio
import signal

from core.logging.logger import get_logger
from .runtime import SyncRuntime


class WorkerCommand:
    """Run the sync poller in the foreground until SIGINT/SIGTERM."""

    def __init__(self, runtime: SyncRuntime) -> None:
        self.runtime = runtime
        self.log = get_logger(__name__, service="worker-cli")

    async def run(self) -> None:
        stop = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, stop.set)
            except (NotImplementedError, RuntimeError):
                # Windows event loops have no signal handlers; Ctrl+C still cancels asyncio.run
                pass

        print("Sync worker running. Press Ctrl+C to stop.", flush=True)
        try:
            async with self.runtime.riot_source() as source:
                poller = self.runtime.poller(source)
                await poller.run(stop)
        except ValueError as e:
            self.log.error(lambda: f"worker-config-error {e}")
            print(f"Error: {e}", flush=True)
            return
        finally:
            for sig in (signal.SIGINT, signal.SIGTERM):
                try:
                    loop.remove_signal_handler(sig)
                except (NotImplementedError, RuntimeError):
                    pass
        print(f"Worker stopped ({poller.jobs_processed} jobs processed).", flush=True)
