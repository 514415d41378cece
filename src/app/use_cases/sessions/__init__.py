"""
Access Session Broker Use Cases

Issuing, redeeming, revoking and sweeping access sessions.
"""

from .issue_session_use_case import IssueSessionUseCase
from .redeem_session_use_case import RedeemSessionUseCase
from .revoke_session_use_case import RevokeSessionUseCase
from .restore_profile_slots_use_case import RestoreProfileSlotsUseCase
from .sweep_expired_sessions_use_case import SweepExpiredSessionsUseCase
from .get_session_status_use_case import GetSessionStatusUseCase
from .dtos import (
    IssueDirectSessionCommand,
    IssueSessionCommand,
    ProfileAccessGrant,
    RevokeSessionResponse,
    SessionGrant,
    SessionStatusResponse,
    SweepSessionsResponse,
)

__all__ = [
    "IssueSessionUseCase",
    "RedeemSessionUseCase",
    "RevokeSessionUseCase",
    "RestoreProfileSlotsUseCase",
    "SweepExpiredSessionsUseCase",
    "GetSessionStatusUseCase",
    "IssueDirectSessionCommand",
    "IssueSessionCommand",
    "ProfileAccessGrant",
    "RevokeSessionResponse",
    "SessionGrant",
    "SessionStatusResponse",
    "SweepSessionsResponse",
]
