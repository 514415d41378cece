"""
SubShare Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import AccessType, AttestationType

# Export all entities
from .delegation import Delegation
from .access_session import AccessSession
from .attestation import Attestation
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "AccessType",
    "AttestationType",
    # Entities
    "Delegation",
    "AccessSession",
    "Attestation",
    "AuditEvent",
]
