"""
SubShare Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AttestationType(str, Enum):
    """Identity claim proven by an attestation"""

    human = "human"
    age18 = "age18"


class AccessType(str, Enum):
    """How an address reaches a pass"""

    direct = "direct"
    delegated = "delegated"
    none = "none"
