"""
Admin API Routes - Operational Endpoints

Authentication is via Admin API Key (X-Admin-API-Key header).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.clock import Clock
from src.app.services.locks import KeyedLock
from src.app.services.profile_allocator import ProfileAllocator
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import GetAuditEventsUseCase
from src.app.use_cases.sessions import SweepExpiredSessionsUseCase, SweepSessionsResponse
from src.depends import get_clock, get_locks, get_profile_allocator, get_unit_of_work
from src.domain.base import ADDRESS_PATTERN

router = APIRouter(prefix="/admin", dependencies=[Depends(verify_admin_api_key)])


@router.post(
    "/sessions/sweep",
    status_code=status.HTTP_200_OK,
    response_model=SweepSessionsResponse,
    response_model_by_alias=True,
)
async def sweep_sessions(
    uow: UnitOfWork = Depends(get_unit_of_work),
    profile_allocator: ProfileAllocator = Depends(get_profile_allocator),
    clock: Clock = Depends(get_clock),
    locks: KeyedLock = Depends(get_locks),
):
    """
    Sweep expired sessions now instead of waiting for the background task.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
    """
    use_case = SweepExpiredSessionsUseCase(uow, profile_allocator, clock, locks)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/audit-events", status_code=status.HTTP_200_OK)
async def get_audit_events(
    action: Optional[str] = Query(None, description="Filter by action"),
    actor: Optional[str] = Query(None, pattern=ADDRESS_PATTERN, description="Filter by actor address"),
    limit: int = Query(50, ge=1, le=100, description="Max events to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get audit events, newest first.

    Requires: X-Admin-API-Key header

    Raises:
        - 400 Bad Request: cursor did not come from a previous page
    """
    use_case = GetAuditEventsUseCase(uow)
    result = await use_case.execute(action=action, actor_address=actor, limit=limit, cursor=cursor)

    if result.is_err():
        if result.error.code == "INVALID_CURSOR":
            raise ClientError(result.error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(result.error)

    return result.value
