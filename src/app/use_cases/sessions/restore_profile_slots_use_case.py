"""
Restore Profile Slots Use Case

Rebuilds slot occupancy from the live session rows, so sessions that
outlived a restart keep their profile.
"""

import logging

from libs.result import Result, Return
from src.app.services.clock import Clock
from src.app.services.profile_allocator import ProfileAllocator
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class RestoreProfileSlotsUseCase:
    """
    Use case for restoring profile slot occupancy at startup.

    Business Rules:
    - Every session with expires_at > now takes back the slot it was issued
    - Expired rows are left for the sweeper
    - Runs before the service accepts requests
    """

    def __init__(self, uow: UnitOfWork, profile_allocator: ProfileAllocator, clock: Clock):
        self.uow = uow
        self.profile_allocator = profile_allocator
        self.clock = clock

    async def execute(self) -> Result[int]:
        restored = 0
        async with self.uow:
            for access_session in await self.uow.access_sessions.get_live(self.clock.now()):
                if await self.profile_allocator.occupy(
                    access_session.pass_id, access_session.profile_handle, access_session.id
                ):
                    restored += 1

        if restored:
            logger.info(f"Restored {restored} profile slot(s) from live sessions")
        return Return.ok(restored)
