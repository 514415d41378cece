from abc import ABC, abstractmethod

from src.app.repositories.access_session_repository import IAccessSessionRepository
from src.app.repositories.attestation_repository import IAttestationRepository
from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.delegation_repository import IDelegationRepository


class UnitOfWork(ABC):
    """Transaction boundary shared by the delegation, session and attestation use cases"""

    delegations: IDelegationRepository
    access_sessions: IAccessSessionRepository
    attestations: IAttestationRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
