from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.access_session_repository import AccessSessionRepository
from src.adapter.repositories.attestation_repository import AttestationRepository
from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.delegation_repository import DelegationRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """One AsyncSession per request; whatever is not committed is rolled back on exit"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        self.delegations = DelegationRepository(self.session)
        self.access_sessions = AccessSessionRepository(self.session)
        self.attestations = AttestationRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
