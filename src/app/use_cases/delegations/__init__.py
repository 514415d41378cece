"""
Delegation Use Cases

Creating, revoking and listing delegations.
"""

from .create_delegation_use_case import CreateDelegationUseCase
from .revoke_delegation_use_case import RevokeDelegationUseCase
from .list_active_delegations_use_case import ListActiveDelegationsUseCase
from .get_delegation_use_case import GetDelegationUseCase
from .dtos import (
    ActiveDelegationsResponse,
    CreateDelegationCommand,
    CreateDelegationResponse,
    DelegationDetailResponse,
    DelegationInfo,
    RevokeDelegationResponse,
)

__all__ = [
    "CreateDelegationUseCase",
    "RevokeDelegationUseCase",
    "ListActiveDelegationsUseCase",
    "GetDelegationUseCase",
    "ActiveDelegationsResponse",
    "CreateDelegationCommand",
    "CreateDelegationResponse",
    "DelegationDetailResponse",
    "DelegationInfo",
    "RevokeDelegationResponse",
]
