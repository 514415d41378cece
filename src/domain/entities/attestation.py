"""
Attestation Entity

Ledger-anchored record of a proof-verified identity claim.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import AttestationType


class Attestation(SQLModel, table=True):
    """
    Attestation entity - evidentiary only, never consulted for access.

    Business Rules:
    - proof_commitment is a SHA-256 commitment, the proof itself is not stored
    - expires_at > issued_at
    - Immutable once anchored; expired rows are kept
    """

    __tablename__ = "attestations"

    id: str = Field(primary_key=True, max_length=66)

    user_address: str = Field(max_length=18, index=True)
    attestation_type: AttestationType
    proof_commitment: str = Field(max_length=66)
    signature: str = Field(max_length=256)
    transaction_id: Optional[str] = Field(default=None, max_length=66)

    # Timestamps
    issued_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (
        Index("idx_attestation_user_type", "user_address", "attestation_type"),
    )

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
