from abc import ABC, abstractmethod
from typing import List

from src.domain.entities import AttestationType


class ProofVerifier(ABC):
    """Checks the cryptographic validity of an identity proof"""

    @abstractmethod
    async def verify(
        self, proof: str, public_signals: List[str], attestation_type: AttestationType
    ) -> bool:
        pass
