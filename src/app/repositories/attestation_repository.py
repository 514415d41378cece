from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import Attestation


class IAttestationRepository(ABC):
    """Attestation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, attestation_id: str) -> Optional[Attestation]:
        """Get attestation by ledger-assigned ID"""
        pass

    @abstractmethod
    async def create(self, attestation: Attestation) -> Attestation:
        """Persist an anchored attestation (immutable)"""
        pass

    @abstractmethod
    async def get_by_user(self, user_address: str) -> List[Attestation]:
        """Get all attestations for an address, newest first"""
        pass
