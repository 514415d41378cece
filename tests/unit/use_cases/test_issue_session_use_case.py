"""
Unit tests for Issue Session Use Case
"""

import asyncio
import pytest
from datetime import timedelta
from unittest.mock import AsyncMock

from src.api.utils.jwt import verify_access_token
from src.app.use_cases.sessions import (
    IssueDirectSessionCommand,
    IssueSessionCommand,
    IssueSessionUseCase,
    SweepExpiredSessionsUseCase,
)
from src.domain.entities import AccessSession, Delegation
from tests.fixtures.fakes import DELEGATE, OTHER, OWNER


def make_delegation(clock, delegation_id=1, delegate=DELEGATE, **overrides):
    fields = dict(
        id=delegation_id,
        pass_id=1,
        creator_address=OWNER,
        delegate_address=delegate,
        is_active=True,
        created_at=clock.now(),
        expires_at=clock.now() + timedelta(days=1),
    )
    fields.update(overrides)
    return Delegation(**fields)


def stub_repositories(mock_uow, *delegations, expired=None):
    by_id = {d.id: d for d in delegations}
    mock_uow.delegations.get_by_id = AsyncMock(side_effect=lambda i: by_id.get(i))
    mock_uow.access_sessions.get_expired = AsyncMock(return_value=expired or [])
    mock_uow.access_sessions.delete = AsyncMock()

    async def create(access_session):
        await asyncio.sleep(0)
        return access_session

    mock_uow.access_sessions.create = AsyncMock(side_effect=create)


def build_use_case(mock_uow, allocator, ledger, clock, locks):
    return IssueSessionUseCase(mock_uow, allocator, ledger, clock, locks)


@pytest.mark.asyncio
async def test_issue_session_success(mock_uow, allocator, ledger, clock, locks):
    """Test delegate opening a one hour session"""
    stub_repositories(mock_uow, make_delegation(clock))

    use_case = build_use_case(mock_uow, allocator, ledger, clock, locks)
    result = await use_case.execute(
        IssueSessionCommand(delegation_id=1, requester_address=DELEGATE, duration_seconds=3600)
    )

    assert result.is_ok()
    grant = result.value
    assert grant.delegation_id == 1
    assert grant.pass_id == 1
    assert grant.grantee_address == DELEGATE
    assert grant.profile_handle == "pass-1-slot-0"
    assert grant.profile_name == f"Renter_{DELEGATE[-6:]}"
    assert grant.expires_at == (clock.now() + timedelta(hours=1)).isoformat() + "Z"
    assert len(grant.instructions) == 5
    assert allocator.holders(1) == 1

    token = grant.access_url.split("token=")[1]
    payload = verify_access_token(token, verify_exp=False)
    assert payload["sid"] == grant.session_id
    assert payload["sub"] == DELEGATE

    created = mock_uow.access_sessions.create.call_args[0][0]
    assert created.owner_address == OWNER
    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "session_issued"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_issue_session_capped_by_delegation_expiry(mock_uow, allocator, ledger, clock, locks):
    """Test a session never outlives its delegation"""
    delegation = make_delegation(clock, expires_at=clock.now() + timedelta(hours=2))
    stub_repositories(mock_uow, delegation)

    use_case = build_use_case(mock_uow, allocator, ledger, clock, locks)
    result = await use_case.execute(
        IssueSessionCommand(delegation_id=1, requester_address=DELEGATE, duration_seconds=86400)
    )

    assert result.is_ok()
    created = mock_uow.access_sessions.create.call_args[0][0]
    assert created.expires_at == delegation.expires_at


@pytest.mark.asyncio
async def test_issue_session_duration_too_short(mock_uow, allocator, ledger, clock, locks):
    """Test a delegation 60 seconds from expiry cannot open a session"""
    stub_repositories(
        mock_uow, make_delegation(clock, expires_at=clock.now() + timedelta(seconds=60))
    )

    use_case = build_use_case(mock_uow, allocator, ledger, clock, locks)
    result = await use_case.execute(
        IssueSessionCommand(delegation_id=1, requester_address=DELEGATE, duration_seconds=3600)
    )

    assert result.is_err()
    assert result.error.code == "DURATION_TOO_SHORT"
    assert allocator.holders(1) == 0
    mock_uow.access_sessions.create.assert_not_called()


@pytest.mark.asyncio
async def test_issue_session_requested_duration_too_short(mock_uow, allocator, ledger, clock, locks):
    stub_repositories(mock_uow, make_delegation(clock))

    use_case = build_use_case(mock_uow, allocator, ledger, clock, locks)
    result = await use_case.execute(
        IssueSessionCommand(delegation_id=1, requester_address=DELEGATE, duration_seconds=299)
    )

    assert result.is_err()
    assert result.error.code == "DURATION_TOO_SHORT"


@pytest.mark.asyncio
async def test_issue_session_delegation_not_found(mock_uow, allocator, ledger, clock, locks):
    stub_repositories(mock_uow)

    use_case = build_use_case(mock_uow, allocator, ledger, clock, locks)
    result = await use_case.execute(
        IssueSessionCommand(delegation_id=5, requester_address=DELEGATE, duration_seconds=3600)
    )

    assert result.is_err()
    assert result.error.code == "DELEGATION_NOT_FOUND"


@pytest.mark.asyncio
async def test_issue_session_wrong_requester(mock_uow, allocator, ledger, clock, locks):
    stub_repositories(mock_uow, make_delegation(clock))

    use_case = build_use_case(mock_uow, allocator, ledger, clock, locks)
    result = await use_case.execute(
        IssueSessionCommand(delegation_id=1, requester_address=OTHER, duration_seconds=3600)
    )

    assert result.is_err()
    assert result.error.code == "UNAUTHORIZED"
    assert allocator.holders(1) == 0


@pytest.mark.asyncio
async def test_issue_session_revoked_delegation(mock_uow, allocator, ledger, clock, locks):
    stub_repositories(
        mock_uow, make_delegation(clock, is_active=False, revoked_at=clock.now())
    )

    use_case = build_use_case(mock_uow, allocator, ledger, clock, locks)
    result = await use_case.execute(
        IssueSessionCommand(delegation_id=1, requester_address=DELEGATE, duration_seconds=3600)
    )

    assert result.is_err()
    assert result.error.code == "DELEGATION_EXPIRED"


@pytest.mark.asyncio
async def test_issue_session_expired_delegation(mock_uow, allocator, ledger, clock, locks):
    stub_repositories(mock_uow, make_delegation(clock))
    clock.advance(days=1)

    use_case = build_use_case(mock_uow, allocator, ledger, clock, locks)
    result = await use_case.execute(
        IssueSessionCommand(delegation_id=1, requester_address=DELEGATE, duration_seconds=3600)
    )

    assert result.is_err()
    assert result.error.code == "DELEGATION_EXPIRED"


@pytest.mark.asyncio
async def test_issue_session_resource_busy(mock_uow, allocator, ledger, clock, locks):
    """Test a second session on a single-slot pass is rejected, not queued"""
    stub_repositories(mock_uow, make_delegation(clock, 1), make_delegation(clock, 2, delegate=OTHER))

    use_case = build_use_case(mock_uow, allocator, ledger, clock, locks)
    first = await use_case.execute(
        IssueSessionCommand(delegation_id=1, requester_address=DELEGATE, duration_seconds=3600)
    )
    second = await use_case.execute(
        IssueSessionCommand(delegation_id=2, requester_address=OTHER, duration_seconds=3600)
    )

    assert first.is_ok()
    assert second.is_err()
    assert second.error.code == "RESOURCE_BUSY"
    assert allocator.holders(1) == 1


@pytest.mark.asyncio
async def test_issue_session_concurrent_requests_are_exclusive(
    mock_uow, allocator, ledger, clock, locks
):
    """Test concurrent issuance for one pass grants exactly one session"""
    stub_repositories(mock_uow, make_delegation(clock, 1), make_delegation(clock, 2, delegate=OTHER))

    use_case = build_use_case(mock_uow, allocator, ledger, clock, locks)
    results = await asyncio.gather(
        use_case.execute(
            IssueSessionCommand(delegation_id=1, requester_address=DELEGATE, duration_seconds=3600)
        ),
        use_case.execute(
            IssueSessionCommand(delegation_id=2, requester_address=OTHER, duration_seconds=3600)
        ),
    )

    granted = [r for r in results if r.is_ok()]
    rejected = [r for r in results if r.is_err()]
    assert len(granted) == 1
    assert len(rejected) == 1
    assert rejected[0].error.code == "RESOURCE_BUSY"
    assert allocator.holders(1) == 1


@pytest.mark.asyncio
async def test_issue_session_sweeps_expired_sessions_first(
    mock_uow, allocator, ledger, clock, locks
):
    """Test an expired session of the pass does not keep its slot"""
    handle = await allocator.acquire(1, "stale", OTHER)
    stale = AccessSession(
        id="stale",
        delegation_id=None,
        pass_id=1,
        owner_address=OWNER,
        grantee_address=OTHER,
        profile_handle=handle.handle_id,
        profile_name=handle.display_name,
        issued_at=clock.now() - timedelta(hours=2),
        expires_at=clock.now() - timedelta(hours=1),
    )
    stub_repositories(mock_uow, make_delegation(clock), expired=[stale])

    use_case = build_use_case(mock_uow, allocator, ledger, clock, locks)
    result = await use_case.execute(
        IssueSessionCommand(delegation_id=1, requester_address=DELEGATE, duration_seconds=3600)
    )

    assert result.is_ok()
    mock_uow.access_sessions.delete.assert_called_once_with(stale)
    mock_uow.access_sessions.get_expired.assert_called_once_with(clock.now(), pass_id=1)
    assert allocator.holders(1) == 1


@pytest.mark.asyncio
async def test_issue_session_releases_slot_when_persist_fails(
    mock_uow, allocator, ledger, clock, locks
):
    stub_repositories(mock_uow, make_delegation(clock))
    mock_uow.access_sessions.create = AsyncMock(side_effect=RuntimeError("disk full"))

    use_case = build_use_case(mock_uow, allocator, ledger, clock, locks)
    with pytest.raises(RuntimeError):
        await use_case.execute(
            IssueSessionCommand(delegation_id=1, requester_address=DELEGATE, duration_seconds=3600)
        )

    assert allocator.holders(1) == 0


@pytest.mark.asyncio
async def test_issue_direct_session_for_owner(mock_uow, allocator, ledger, clock, locks):
    pass_id = await ledger.mint(OWNER)
    stub_repositories(mock_uow)

    use_case = build_use_case(mock_uow, allocator, ledger, clock, locks)
    result = await use_case.execute_for_owner(
        IssueDirectSessionCommand(pass_id=pass_id, owner_address=OWNER, duration_seconds=7200)
    )

    assert result.is_ok()
    assert result.value.delegation_id is None
    assert result.value.grantee_address == OWNER
    created = mock_uow.access_sessions.create.call_args[0][0]
    assert created.delegation_id is None
    assert created.expires_at == clock.now() + timedelta(hours=2)


@pytest.mark.asyncio
async def test_issue_direct_session_not_owner(mock_uow, allocator, ledger, clock, locks):
    pass_id = await ledger.mint(OWNER)
    stub_repositories(mock_uow)

    use_case = build_use_case(mock_uow, allocator, ledger, clock, locks)
    result = await use_case.execute_for_owner(
        IssueDirectSessionCommand(pass_id=pass_id, owner_address=DELEGATE, duration_seconds=3600)
    )

    assert result.is_err()
    assert result.error.code == "NOT_OWNER"
    assert allocator.holders(pass_id) == 0


@pytest.mark.asyncio
async def test_issue_waits_for_sweep_of_same_pass(mock_uow, allocator, ledger, clock, locks):
    """Test a sweep in flight cannot free the slot a new session has taken"""
    pass_id = await ledger.mint(OWNER)
    handle = await allocator.acquire(pass_id, "stale", OTHER)
    store = {
        "stale": AccessSession(
            id="stale",
            delegation_id=None,
            pass_id=pass_id,
            owner_address=OWNER,
            grantee_address=OTHER,
            profile_handle=handle.handle_id,
            profile_name=handle.display_name,
            issued_at=clock.now() - timedelta(hours=2),
            expires_at=clock.now() - timedelta(hours=1),
        )
    }
    gate = asyncio.Event()
    sweep_deleting = asyncio.Event()

    async def get_expired(now, pass_id=None):
        return [
            s for s in store.values() if s.expires_at <= now and pass_id in (None, s.pass_id)
        ]

    async def delete(access_session):
        sweep_deleting.set()
        await gate.wait()
        store.pop(access_session.id, None)

    async def create(access_session):
        store[access_session.id] = access_session
        return access_session

    mock_uow.access_sessions.get_expired = AsyncMock(side_effect=get_expired)
    mock_uow.access_sessions.delete = AsyncMock(side_effect=delete)
    mock_uow.access_sessions.create = AsyncMock(side_effect=create)

    sweep = SweepExpiredSessionsUseCase(mock_uow, allocator, clock, locks)
    issue = build_use_case(mock_uow, allocator, ledger, clock, locks)
    command = IssueDirectSessionCommand(
        pass_id=pass_id, owner_address=OWNER, duration_seconds=3600
    )

    sweep_task = asyncio.create_task(sweep.execute())
    await sweep_deleting.wait()
    issue_task = asyncio.create_task(issue.execute_for_owner(command))
    await asyncio.sleep(0.01)
    assert not issue_task.done()

    gate.set()
    swept, first = await asyncio.gather(sweep_task, issue_task)
    second = await issue.execute_for_owner(command)

    assert swept.value.swept == 1
    assert first.is_ok()
    assert second.is_err()
    assert second.error.code == "RESOURCE_BUSY"
    assert allocator.holder_of(pass_id, handle.handle_id) == first.value.session_id
