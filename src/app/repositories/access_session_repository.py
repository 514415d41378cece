from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.domain.entities import AccessSession


class IAccessSessionRepository(ABC):
    """AccessSession repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: str) -> Optional[AccessSession]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def create(self, access_session: AccessSession) -> AccessSession:
        """Create a new session"""
        pass

    @abstractmethod
    async def delete(self, access_session: AccessSession) -> None:
        """Remove a session row"""
        pass

    @abstractmethod
    async def get_expired(
        self, now: datetime, pass_id: Optional[int] = None
    ) -> List[AccessSession]:
        """Get sessions with expires_at <= now, optionally for one pass"""
        pass

    @abstractmethod
    async def get_live_by_delegation(
        self, delegation_id: int, now: datetime
    ) -> List[AccessSession]:
        """Get sessions issued from a delegation that have not expired"""
        pass

    @abstractmethod
    async def get_live(self, now: datetime) -> List[AccessSession]:
        """Get every session with expires_at > now"""
        pass
