"""
Get Session Status Use Case
"""

from libs.result import Result, Return
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork

from .dtos import SessionStatusResponse


class GetSessionStatusUseCase:
    """Report whether a session is live and how long it has left"""

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(self, session_id: str) -> Result[SessionStatusResponse]:
        async with self.uow:
            access_session = await self.uow.access_sessions.get_by_id(session_id)
            if access_session is None:
                return Return.ok(
                    SessionStatusResponse(
                        session_id=session_id, is_active=False, time_remaining_seconds=0
                    )
                )

            now = self.clock.now()
            return Return.ok(
                SessionStatusResponse(
                    session_id=session_id,
                    is_active=access_session.is_live(now),
                    time_remaining_seconds=access_session.remaining_seconds(now),
                    profile_name=access_session.profile_name,
                )
            )
