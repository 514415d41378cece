from datetime import datetime
from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.access_session_repository import IAccessSessionRepository
from src.domain.entities import AccessSession


class AccessSessionRepository(IAccessSessionRepository):
    """AccessSession repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: str) -> Optional[AccessSession]:
        """Get session by ID"""
        stmt = select(AccessSession).where(AccessSession.id == session_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, access_session: AccessSession) -> AccessSession:
        """Create a new session"""
        self.session.add(access_session)
        await self.session.flush()
        await self.session.refresh(access_session)
        return access_session

    async def delete(self, access_session: AccessSession) -> None:
        """Remove a session row"""
        await self.session.delete(access_session)
        await self.session.flush()

    async def get_expired(
        self, now: datetime, pass_id: Optional[int] = None
    ) -> List[AccessSession]:
        """Get sessions with expires_at <= now, optionally for one pass"""
        stmt = select(AccessSession).where(AccessSession.expires_at <= now)
        if pass_id is not None:
            stmt = stmt.where(AccessSession.pass_id == pass_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_live_by_delegation(
        self, delegation_id: int, now: datetime
    ) -> List[AccessSession]:
        """Get unexpired sessions issued from a delegation"""
        stmt = select(AccessSession).where(
            AccessSession.delegation_id == delegation_id,
            AccessSession.expires_at > now,
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_live(self, now: datetime) -> List[AccessSession]:
        stmt = select(AccessSession).where(AccessSession.expires_at > now)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
