"""
AuditEvent Entity

Immutable log of delegation, session and attestation events.
"""

from datetime import UTC, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of access-control state changes.

    Business Rules:
    - Immutable (never updated or deleted)
    - actor_address nullable for system events (sweeps)
    - Metadata stores ids and counts relevant to the action
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    actor_address: Optional[str] = Field(default=None, max_length=18, index=True)

    action: str = Field(max_length=100)  # e.g., "delegation_created"
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC).replace(tzinfo=None), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_action", "action"),
    )
