import logging
from typing import Dict, Optional

from src.app.services.profile_allocator import ProfileAllocator, ProfileHandle

logger = logging.getLogger(__name__)


class InMemoryProfileAllocator(ProfileAllocator):
    """
    Fixed number of profile slots per pass, tracked in process memory.

    With slots_per_pass=1 (the default) every pass is single-occupancy.
    None of the methods await, so each runs atomically on the event loop.
    Occupancy is rebuilt from the live session rows at startup.
    """

    def __init__(self, slots_per_pass: int = 1):
        if slots_per_pass < 1:
            raise ValueError("slots_per_pass must be at least 1")
        self.slots_per_pass = slots_per_pass
        # pass_id -> handle_id -> holding session id
        self._held: Dict[int, Dict[str, str]] = {}

    def _handle_id(self, pass_id: int, slot: int) -> str:
        return f"pass-{pass_id}-slot-{slot}"

    async def acquire(
        self, pass_id: int, session_id: str, grantee_address: str
    ) -> Optional[ProfileHandle]:
        held = self._held.setdefault(pass_id, {})
        for slot in range(self.slots_per_pass):
            handle_id = self._handle_id(pass_id, slot)
            if handle_id not in held:
                held[handle_id] = session_id
                return ProfileHandle(
                    handle_id=handle_id,
                    display_name=f"Renter_{grantee_address[-6:]}",
                )
        return None

    async def release(self, pass_id: int, handle_id: str, session_id: str) -> bool:
        held = self._held.get(pass_id)
        if not held or held.get(handle_id) != session_id:
            return False
        del held[handle_id]
        if not held:
            del self._held[pass_id]
        return True

    async def occupy(self, pass_id: int, handle_id: str, session_id: str) -> bool:
        held = self._held.setdefault(pass_id, {})
        holder = held.get(handle_id)
        if holder is not None and holder != session_id:
            logger.warning(
                f"Slot {handle_id} claimed by session {session_id} but held by {holder}"
            )
            return False
        held[handle_id] = session_id
        return True
