"""
Attestation Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import List, Optional

from src.domain.base import ApiModel, isoformat
from src.domain.entities import Attestation, AttestationType


# ============================================================================
# Commands
# ============================================================================


class VerifyAttestationCommand(ApiModel):
    """Proof submitted for verification and anchoring"""

    proof: str
    public_signals: List[str]
    attestation_type: AttestationType
    user_address: str


class AnchorAttestationCommand(ApiModel):
    """Client-prepared attestation to anchor as-is"""

    user_address: str
    proof_hash: str
    signature: str
    attestation_type: AttestationType
    expiry: int


# ============================================================================
# Response DTOs
# ============================================================================


class AttestationInfo(ApiModel):
    """Attestation as returned to clients"""

    attestation_id: str
    user_address: str
    attestation_type: AttestationType
    proof_commitment: str
    signature: str
    transaction_id: Optional[str] = None
    issued_at: str
    expires_at: str
    is_expired: bool

    @classmethod
    def from_entity(cls, attestation: Attestation, now: datetime) -> "AttestationInfo":
        return cls(
            attestation_id=attestation.id,
            user_address=attestation.user_address,
            attestation_type=attestation.attestation_type,
            proof_commitment=attestation.proof_commitment,
            signature=attestation.signature,
            transaction_id=attestation.transaction_id,
            issued_at=isoformat(attestation.issued_at),
            expires_at=isoformat(attestation.expires_at),
            is_expired=attestation.is_expired(now),
        )


class VerifyAttestationResponse(ApiModel):
    """Response for verify attestation use case"""

    valid: bool = True
    attestation: AttestationInfo


class AnchorAttestationResponse(ApiModel):
    """Response for anchor attestation use case"""

    success: bool = True
    attestation_id: str
    transaction_id: Optional[str] = None
    anchored: bool = True


class AttestationListResponse(ApiModel):
    """Response for list attestations use case"""

    user_address: str
    attestations: List[AttestationInfo]
    count: int
