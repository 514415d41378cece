from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.attestation_repository import IAttestationRepository
from src.domain.entities import Attestation


class AttestationRepository(IAttestationRepository):
    """Attestation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, attestation_id: str) -> Optional[Attestation]:
        """Get attestation by ledger-assigned ID"""
        stmt = select(Attestation).where(Attestation.id == attestation_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, attestation: Attestation) -> Attestation:
        """Persist an anchored attestation (immutable)"""
        self.session.add(attestation)
        await self.session.flush()
        await self.session.refresh(attestation)
        return attestation

    async def get_by_user(self, user_address: str) -> List[Attestation]:
        """Get all attestations for an address, newest first"""
        stmt = (
            select(Attestation)
            .where(Attestation.user_address == user_address)
            .order_by(Attestation.issued_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
