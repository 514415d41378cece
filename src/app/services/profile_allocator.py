from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ProfileHandle:
    handle_id: str
    display_name: str


class ProfileAllocator(ABC):
    """
    Manages occupancy of the shared profile slots behind each pass.

    Every held slot is bound to the session that took it, so a stale
    release on behalf of an older session never frees a slot that a newer
    session has since taken.
    """

    @abstractmethod
    async def acquire(
        self, pass_id: int, session_id: str, grantee_address: str
    ) -> Optional[ProfileHandle]:
        """Take a free slot for the session, or None if every slot is held"""
        pass

    @abstractmethod
    async def release(self, pass_id: int, handle_id: str, session_id: str) -> bool:
        """Free the slot if session_id still holds it; returns whether it was freed"""
        pass

    @abstractmethod
    async def occupy(self, pass_id: int, handle_id: str, session_id: str) -> bool:
        """Mark a slot as held by an existing session (rebuilding state on startup)"""
        pass
