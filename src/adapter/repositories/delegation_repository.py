from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.delegation_repository import IDelegationRepository
from src.domain.entities import Delegation


class DelegationRepository(IDelegationRepository):
    """Delegation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, delegation_id: int) -> Optional[Delegation]:
        """Get delegation by ID"""
        stmt = select(Delegation).where(Delegation.id == delegation_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, delegation: Delegation) -> Delegation:
        """Create a new delegation; the ID is assigned on flush"""
        self.session.add(delegation)
        await self.session.flush()
        await self.session.refresh(delegation)
        return delegation

    async def update(self, delegation: Delegation) -> Delegation:
        """Update existing delegation"""
        self.session.add(delegation)
        await self.session.flush()
        await self.session.refresh(delegation)
        return delegation

    async def get_by_delegate(self, delegate_address: str) -> List[Delegation]:
        """Get every delegation granted to an address"""
        stmt = (
            select(Delegation)
            .where(Delegation.delegate_address == delegate_address)
            .order_by(Delegation.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
