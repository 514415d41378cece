"""
Attestation Registry Use Cases
"""

from .verify_attestation_use_case import VerifyAttestationUseCase
from .anchor_attestation_use_case import AnchorAttestationUseCase
from .list_attestations_use_case import ListAttestationsUseCase
from .dtos import (
    AnchorAttestationCommand,
    AnchorAttestationResponse,
    AttestationInfo,
    AttestationListResponse,
    VerifyAttestationCommand,
    VerifyAttestationResponse,
)

__all__ = [
    "VerifyAttestationUseCase",
    "AnchorAttestationUseCase",
    "ListAttestationsUseCase",
    "AnchorAttestationCommand",
    "AnchorAttestationResponse",
    "AttestationInfo",
    "AttestationListResponse",
    "VerifyAttestationCommand",
    "VerifyAttestationResponse",
]
