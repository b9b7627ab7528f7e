from __future__ import annotations

from core.logging.logger import get_logger
from domain.errors import SyncError
from .runtime import SyncRuntime


class LinkAccountCommand:
    """Register a user by email and attach a Riot ID to it."""

    def __init__(self, runtime: SyncRuntime) -> None:
        self.runtime = runtime
        self.log = get_logger(__name__, service="link-cli")

    async def run(self) -> None:
        print("\n=== Link Riot account ===", flush=True)
        email = input("Email: ").strip()
        riot_id = input("Riot ID (name#tag): ").strip()
        region = input(f"Region [{self.runtime.default_region.friendly}]: ").strip() or None

        try:
            async with self.runtime.riot_source() as source:
                service = self.runtime.link_service(source)
                user = service.register_user(email)
                user = await service.link_account(user.user_id, riot_id, region)
        except (SyncError, ValueError) as e:
            self.log.warning(lambda: f"link-failed {e}")
            print(f"Error: {e}", flush=True)
            return

        print(f"Linked {user.riot_id} ({user.region})", flush=True)
        print(f"User ID: {user.user_id}", flush=True)
