from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from src.domain.base import to_epoch

from .resilience import CollaboratorError


class LedgerError(CollaboratorError):
    """The ledger rejected or failed to seal a transaction"""


@dataclass(frozen=True)
class AnchorRecord:
    user_address: str
    attestation_type: str
    proof_commitment: str
    signature: str
    issued_at: datetime
    expires_at: datetime

    def canonical(self) -> dict:
        return {
            "userAddress": self.user_address,
            "attestationType": self.attestation_type,
            "proofCommitment": self.proof_commitment,
            "signature": self.signature,
            "issuedAt": to_epoch(self.issued_at),
            "expiresAt": to_epoch(self.expires_at),
        }


@dataclass(frozen=True)
class AnchorReceipt:
    attestation_id: str
    transaction_id: str


class LedgerAnchor(ABC):
    """Anchors attestation records on the ledger"""

    @abstractmethod
    async def anchor(self, record: AnchorRecord) -> AnchorReceipt:
        """
        Anchor a record. Anchoring the same record twice returns the same
        attestation_id.

        Raises:
            LedgerError: the transaction failed
        """
        pass
