from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import Delegation


class IDelegationRepository(ABC):
    """Delegation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, delegation_id: int) -> Optional[Delegation]:
        """Get delegation by ID"""
        pass

    @abstractmethod
    async def create(self, delegation: Delegation) -> Delegation:
        """Create a new delegation, assigning the next ID"""
        pass

    @abstractmethod
    async def update(self, delegation: Delegation) -> Delegation:
        """Update existing delegation"""
        pass

    @abstractmethod
    async def get_by_delegate(self, delegate_address: str) -> List[Delegation]:
        """Get every delegation granted to an address, revoked and expired included"""
        pass
