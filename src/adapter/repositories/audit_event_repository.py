import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.domain.entities import AuditEvent


def encode_cursor(event: AuditEvent) -> str:
    raw = f"{event.created_at.isoformat()}|{event.id}"
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def decode_cursor(cursor: str) -> Tuple[datetime, UUID]:
    try:
        raw = base64.urlsafe_b64decode(cursor.encode("ascii")).decode("utf-8")
        created_at, event_id = raw.split("|", 1)
        return datetime.fromisoformat(created_at), UUID(event_id)
    except (ValueError, UnicodeError) as e:
        raise ValueError(f"Malformed audit cursor: {cursor!r}") from e


class AuditEventRepository(IAuditEventRepository):
    """SQLModel audit log; pages are keyed on (created_at, id)"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        self.session.add(audit_event)
        await self.session.flush()
        await self.session.refresh(audit_event)
        return audit_event

    async def list_events(
        self,
        action: Optional[str] = None,
        actor_address: Optional[str] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[AuditEvent], Optional[str]]:
        stmt = select(AuditEvent)
        if action:
            stmt = stmt.where(AuditEvent.action == action)
        if actor_address:
            stmt = stmt.where(AuditEvent.actor_address == actor_address)

        if cursor:
            after_created_at, after_id = decode_cursor(cursor)
            # Events sharing a timestamp are split by id
            stmt = stmt.where(
                or_(
                    AuditEvent.created_at < after_created_at,
                    and_(AuditEvent.created_at == after_created_at, AuditEvent.id < after_id),
                )
            )

        stmt = stmt.order_by(AuditEvent.created_at.desc(), AuditEvent.id.desc()).limit(limit + 1)
        result = await self.session.exec(stmt)
        events = list(result.all())

        if len(events) <= limit:
            return events, None

        page = events[:limit]
        return page, encode_cursor(page[-1])
