"""
Delegation Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the delegation domain.
Field names are snake_case in Python and camelCase on the wire.
"""

from typing import List, Optional

from src.api.utils.jwt import build_delegation_access_url
from src.domain.base import ApiModel, isoformat
from src.domain.entities import Delegation


# ============================================================================
# Commands
# ============================================================================


class CreateDelegationCommand(ApiModel):
    """Validated intent to grant a delegate temporary use of a pass"""

    pass_id: int
    creator_address: str
    delegate_address: str
    duration_seconds: int


# ============================================================================
# Response DTOs
# ============================================================================


class DelegationInfo(ApiModel):
    """Delegation as returned to clients"""

    id: int
    pass_id: int
    creator_address: str
    delegate_address: str
    created_at: str
    expires_at: str
    is_active: bool
    revoked_at: Optional[str] = None
    access_url: str

    @classmethod
    def from_entity(cls, delegation: Delegation) -> "DelegationInfo":
        return cls(
            id=delegation.id,
            pass_id=delegation.pass_id,
            creator_address=delegation.creator_address,
            delegate_address=delegation.delegate_address,
            created_at=isoformat(delegation.created_at),
            expires_at=isoformat(delegation.expires_at),
            is_active=delegation.is_active,
            revoked_at=isoformat(delegation.revoked_at),
            access_url=build_delegation_access_url(delegation.id),
        )


class CreateDelegationResponse(ApiModel):
    """Response for create delegation use case"""

    success: bool = True
    delegation: DelegationInfo


class RevokeDelegationResponse(ApiModel):
    """Response for revoke delegation use case"""

    success: bool = True
    delegation_id: int
    revoked: bool
    revoked_at: str
    sessions_revoked: int


class ActiveDelegationsResponse(ApiModel):
    """Response for list active delegations use case"""

    address: str
    delegations: List[DelegationInfo]
    active_count: int
    total_count: int


class DelegationDetailResponse(ApiModel):
    """Response for get delegation use case"""

    delegation: DelegationInfo
    is_granting: bool
    remaining_seconds: int
