from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.domain.entities import AuditEvent


class IAuditEventRepository(ABC):
    """Append-only store for audit events"""

    @abstractmethod
    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        pass

    @abstractmethod
    async def list_events(
        self,
        action: Optional[str] = None,
        actor_address: Optional[str] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[AuditEvent], Optional[str]]:
        """
        Newest events first, one page at a time.

        Returns:
            (events, next_cursor); next_cursor is None on the last page

        Raises:
            ValueError: cursor was not produced by this repository
        """
        pass
