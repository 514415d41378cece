from abc import ABC, abstractmethod
from typing import Optional


class OwnershipOracle(ABC):
    """Answers whether an address currently owns a pass"""

    @abstractmethod
    async def owns_asset(self, address: str, pass_id: int) -> bool:
        pass


class PassLedger(OwnershipOracle):
    """Ownership oracle that can also mint and describe passes"""

    @abstractmethod
    async def mint(self, owner_address: str) -> int:
        """Mint a new pass to owner_address and return its ID"""
        pass

    @abstractmethod
    async def get_pass(self, pass_id: int) -> Optional[dict]:
        """Return pass info ({id, name, owner}) or None"""
        pass
