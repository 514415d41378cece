"""
Delegation Entity

Time-bounded grant from a pass owner to a delegate.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class Delegation(SQLModel, table=True):
    """
    Delegation entity - owner grants a delegate temporary use of a pass.

    Business Rules:
    - Creator owned the pass when the delegation was created
    - Creator and delegate are different addresses
    - is_active only flips to False on revocation, never back
    - Expiry is derived from expires_at at read time, never written back
    - Never deleted (kept for audit)
    """

    __tablename__ = "delegations"

    id: Optional[int] = Field(default=None, primary_key=True)

    pass_id: int = Field(nullable=False, index=True)
    creator_address: str = Field(max_length=18, index=True)
    delegate_address: str = Field(max_length=18, index=True)

    is_active: bool = Field(default=True)
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (
        Index("idx_delegation_delegate_pass", "delegate_address", "pass_id"),
        Index("idx_delegation_expires_at", "expires_at"),
        {"sqlite_autoincrement": True},
    )

    def is_granting(self, now: datetime) -> bool:
        return self.is_active and now < self.expires_at

    def remaining_seconds(self, now: datetime) -> int:
        return max(0, int((self.expires_at - now).total_seconds()))
