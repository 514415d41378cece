"""
Get Audit Events Use Case

Pages through the delegation, session and attestation audit log.
"""

from typing import Any, Dict, Optional

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import isoformat, normalize_address


class GetAuditEventsUseCase:
    """
    Use case for reading the audit log.

    Business Rules:
    - Admin-only (enforced by the admin API key at the route)
    - Newest first, optionally narrowed to one action and/or one actor
    - A cursor from a previous page continues after its last event;
      anything else fails with INVALID_CURSOR
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        action: Optional[str] = None,
        actor_address: Optional[str] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        actor = normalize_address(actor_address) if actor_address else None

        async with self.uow:
            try:
                events, next_cursor = await self.uow.audit_events.list_events(
                    action=action, actor_address=actor, limit=limit, cursor=cursor
                )
            except ValueError:
                return Return.err(Error("INVALID_CURSOR", "Pagination cursor is not valid"))

            return Return.ok(
                {
                    "events": [
                        {
                            "action": event.action,
                            "actor_address": event.actor_address,
                            "timestamp": isoformat(event.created_at),
                            "metadata": event.event_metadata or {},
                        }
                        for event in events
                    ],
                    "next_cursor": next_cursor,
                }
            )
