"""
Use Cases

Organized into domain folders:
- delegations/: Delegation store
- access/: Access verification
- sessions/: Access session broker
- attestations/: Attestation registry
- passes/: Simulated ledger passes
- audit/: Audit logs
"""

from .delegations import (
    CreateDelegationUseCase,
    RevokeDelegationUseCase,
    ListActiveDelegationsUseCase,
    GetDelegationUseCase,
)
from .access import CheckAccessUseCase
from .sessions import (
    IssueSessionUseCase,
    RedeemSessionUseCase,
    RevokeSessionUseCase,
    SweepExpiredSessionsUseCase,
    GetSessionStatusUseCase,
)
from .attestations import (
    VerifyAttestationUseCase,
    AnchorAttestationUseCase,
    ListAttestationsUseCase,
)
from .passes import MintPassUseCase, GetPassUseCase
from .audit import GetAuditEventsUseCase

__all__ = [
    # Delegations
    "CreateDelegationUseCase",
    "RevokeDelegationUseCase",
    "ListActiveDelegationsUseCase",
    "GetDelegationUseCase",
    # Access
    "CheckAccessUseCase",
    # Sessions
    "IssueSessionUseCase",
    "RedeemSessionUseCase",
    "RevokeSessionUseCase",
    "SweepExpiredSessionsUseCase",
    "GetSessionStatusUseCase",
    # Attestations
    "VerifyAttestationUseCase",
    "AnchorAttestationUseCase",
    "ListAttestationsUseCase",
    # Passes
    "MintPassUseCase",
    "GetPassUseCase",
    # Audit
    "GetAuditEventsUseCase",
]
