"""
Access Session Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the session broker.
"""

from typing import List, Optional

from src.domain.base import ApiModel


# ============================================================================
# Commands
# ============================================================================


class IssueSessionCommand(ApiModel):
    """Delegate asks to turn a delegation into a live session"""

    delegation_id: int
    requester_address: str
    duration_seconds: int


class IssueDirectSessionCommand(ApiModel):
    """Pass owner asks for a session on their own pass"""

    pass_id: int
    owner_address: str
    duration_seconds: int


# ============================================================================
# Response DTOs
# ============================================================================


class SessionGrant(ApiModel):
    """Issued session with delegate-facing instructions"""

    session_id: str
    delegation_id: Optional[int] = None
    pass_id: int
    grantee_address: str
    profile_handle: str
    profile_name: str
    issued_at: str
    expires_at: str
    access_url: str
    instructions: List[str]


class ProfileAccessGrant(ApiModel):
    """What a grantee gets back when redeeming a session"""

    session_id: str
    profile_handle: str
    profile_name: str
    expires_at: str
    instructions: List[str]


class RevokeSessionResponse(ApiModel):
    """Response for revoke session use case"""

    session_id: str
    revoked: bool


class SessionStatusResponse(ApiModel):
    """Response for session status use case"""

    session_id: str
    is_active: bool
    time_remaining_seconds: int
    profile_name: Optional[str] = None


class SweepSessionsResponse(ApiModel):
    """Response for sweep expired sessions use case"""

    swept: int
