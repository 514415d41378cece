"""
AccessSession Entity

Ephemeral brokered access to a pass's shared resource.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class AccessSession(SQLModel, table=True):
    """
    AccessSession entity - opaque token bound to a grantee and a profile slot.

    Business Rules:
    - id is unguessable (secrets.token_urlsafe)
    - delegation_id is NULL for sessions issued directly to the pass owner
    - expires_at never exceeds the authorizing delegation's expires_at
    - Holds exactly one profile handle, released when the row is removed
    - Live iff now < expires_at; expired rows are deleted by the sweep
    """

    __tablename__ = "access_sessions"

    id: str = Field(primary_key=True, max_length=64)

    delegation_id: Optional[int] = Field(
        default=None, foreign_key="delegations.id", index=True
    )
    pass_id: int = Field(nullable=False, index=True)
    owner_address: str = Field(max_length=18)
    grantee_address: str = Field(max_length=18, index=True)

    profile_handle: str = Field(max_length=64)
    profile_name: str = Field(max_length=64)

    # Timestamps
    issued_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (Index("idx_access_session_expires_at", "expires_at"),)

    def is_live(self, now: datetime) -> bool:
        return now < self.expires_at

    def remaining_seconds(self, now: datetime) -> int:
        return max(0, int((self.expires_at - now).total_seconds()))
